"""Nested API: routers composed under prefixes.

Demonstrates prefixes, ``:name`` parameters, per-method handlers with an
``ALL`` fallback, nesting, and the pass-through for unknown paths.

Inspect:
    waypoint routes app:router
    waypoint match app:router /api/users/42 --method DELETE
"""

from waypoint import create_router

USERS = {"1": "ada", "2": "grace"}


def list_users(context, next):
    context.body = sorted(USERS.values())


def show_user(context, next):
    user_id = context.request.params["id"]
    if user_id in USERS:
        context.body = USERS[user_id]
    else:
        context.status = 404


def create_user(context, next):
    context.status = 201


def method_not_allowed(context, next):
    context.status = 405


def show_post(context, next):
    params = context.request.params
    context.body = f"post {params['post']} by user {params['id']}"


def users(r):
    r.get("/", list_users)
    r.post("/", create_user)
    r.get("/:id", show_user)
    r.all("/:id", method_not_allowed)


def posts(r):
    r.get("/:post", show_post)


def api(r):
    # Anchored, so /users/:id does not also claim /users/:id/posts/:post
    r.nest(create_router({"prefix": "/users/:id/posts", "end": True}, posts))
    r.nest(create_router({"prefix": "/users", "end": True}, users))


router = create_router("/api", api)
