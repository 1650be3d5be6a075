"""Path template compilation.

Turns ``/users/:id`` style templates into anchored regular expressions and
records where each ``:name`` parameter sits in the full path.

Examples::

    compile_pattern("/users/:id", RouterOptions()).source
        -> "^/users/[A-Za-z0-9\\-_.:]+"
    extract_params("/users/:id", RouterOptions(prefix="/api"))
        -> {"id": 2}
"""

import re
from typing import TypeAlias
from dataclasses import dataclass, field

from waypoint.config import RouterOptions
from waypoint.errors import DuplicateParamError, InvalidPathError, InvalidPrefixError

# Characters a single path segment may contain
SEGMENT = r"[A-Za-z0-9\-_.:]+"

_PATH_RE = re.compile(rf"^(/{SEGMENT})+/?$")
_PREFIX_RE = re.compile(rf"^(/{SEGMENT})+$")

ParamMap: TypeAlias = dict[str, int]


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of an effective template.

    Literal: ``users``  (is_param=False)
    Param:   ``:id``    (is_param=True, param_name="id")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None


@dataclass(frozen=True, slots=True)
class CompiledPattern:
    """A compiled matcher for one effective template.

    Identity is the regex source plus case sensitivity, so two
    declarations that normalize to the same matcher compare and hash
    equal and land on the same route table entry.
    """

    source: str
    case: bool
    regex: re.Pattern[str] = field(compare=False, repr=False)
    template: str | None = field(default=None, compare=False)

    @classmethod
    def from_regex(cls, regex: re.Pattern[str]) -> "CompiledPattern":
        """Wrap a native pattern without translating it."""
        return cls(
            source=regex.pattern,
            case=not regex.flags & re.IGNORECASE,
            regex=regex,
        )

    @property
    def is_native(self) -> bool:
        return self.template is None

    def match(self, path: str) -> re.Match[str] | None:
        """Match from the start of *path*; trailing content is allowed unless anchored."""
        return self.regex.match(path)


def split_segments(path: str) -> list[str]:
    """Split a path into segments, dropping the empty item before the leading slash.

    ``"/"`` -> ``[""]``, ``"/a/b/"`` -> ``["a", "b", ""]``.
    """
    return path.split("/")[1:]


def validate_template(template: object) -> str:
    """Return *template* unchanged if it is a well-formed path template."""
    if not isinstance(template, str):
        msg = f"Path must be a string or a compiled pattern, got {type(template).__name__}"
        raise InvalidPathError(msg, template)
    if template != "/" and not _PATH_RE.match(template):
        msg = f"Invalid path {template!r}: expected '/' or slash-separated segments"
        raise InvalidPathError(msg, template)
    for part in split_segments(template):
        if part == ":":
            msg = f"Invalid path {template!r}: parameter segment without a name"
            raise InvalidPathError(msg, template)
    return template


def validate_prefix(prefix: object) -> str:
    """Return *prefix* unchanged if it is empty or a well-formed prefix."""
    if not isinstance(prefix, str):
        msg = f"Prefix must be a string, got {type(prefix).__name__}"
        raise InvalidPrefixError(msg, prefix)
    if prefix and not _PREFIX_RE.match(prefix):
        msg = f"Invalid prefix {prefix!r}: expected '' or slash-separated segments without a trailing slash"
        raise InvalidPrefixError(msg, prefix)
    for part in split_segments(prefix):
        if part == ":":
            msg = f"Invalid prefix {prefix!r}: parameter segment without a name"
            raise InvalidPrefixError(msg, prefix)
    return prefix


def parse_template(template: str) -> list[PathSegment]:
    """Parse an effective template into segments.

    Examples::

        "/"           -> [PathSegment("")]
        "/users"      -> [PathSegment("users")]
        "/users/:id"  -> [PathSegment("users"), PathSegment(":id", is_param=True, param_name="id")]
    """
    segments: list[PathSegment] = []
    for part in split_segments(template):
        if part.startswith(":"):
            segments.append(PathSegment(value=part, is_param=True, param_name=part[1:]))
        else:
            segments.append(PathSegment(value=part))
    return segments


def effective_template(template: object, options: RouterOptions) -> str:
    """Validate *template* and the options prefix, then join them."""
    path = validate_template(template)
    prefix = validate_prefix(options.prefix)
    return prefix + path


def compile_pattern(
    template: str | re.Pattern[str],
    options: RouterOptions,
) -> CompiledPattern:
    """Compile a path template under *options* into a ``CompiledPattern``.

    Native ``re.Pattern`` objects pass through untouched; the prefix is
    not applied to them.

    Raises ``InvalidPathError`` / ``InvalidPrefixError`` for malformed input.
    """
    if isinstance(template, re.Pattern):
        return CompiledPattern.from_regex(template)

    full = effective_template(template, options)
    parts = ["^"]
    for seg in parse_template(full):
        parts.append("/")
        parts.append(SEGMENT if seg.is_param else re.escape(seg.value))
    if options.end:
        parts.append("$")

    source = "".join(parts)
    flags = 0 if options.case else re.IGNORECASE
    return CompiledPattern(
        source=source,
        case=options.case,
        regex=re.compile(source, flags),
        template=full,
    )


def extract_params(template: str | re.Pattern[str], options: RouterOptions) -> ParamMap:
    """Map each ``:name`` in the effective template to its segment index.

    Indices count from the first segment of the full path, prefix
    included. Native patterns carry no positional parameters.

    Raises ``DuplicateParamError`` if a name occurs twice.
    """
    if isinstance(template, re.Pattern):
        return {}

    full = effective_template(template, options)
    params: ParamMap = {}
    for index, seg in enumerate(parse_template(full)):
        if not seg.is_param:
            continue
        name = seg.param_name or ""
        if name in params:
            msg = f"Duplicate parameter {name!r} in path {full!r}"
            raise DuplicateParamError(msg, full, name=name)
        params[name] = index
    return params
