"""Placeholder substitution.

TemplateResolver turns a parsed Template plus positional arguments into the
final display string. Out-of-range placeholders are handled according to
the configured PlaceholderPolicy.

Python 3.13+. Zero external dependencies.
"""

import logging
from collections.abc import Iterable, Sequence

from nlsbundle.diagnostics import ErrorTemplate, PlaceholderIndexOutOfRangeError
from nlsbundle.enums import PlaceholderPolicy
from nlsbundle.syntax.ast import Placeholder, Template, TextElement

__all__ = ["TemplateResolver", "coerce_args", "stringify_argument"]

logger = logging.getLogger(__name__)


def stringify_argument(value: object) -> str:
    """Render one substitution argument as text.

    None renders as the empty string and booleans as "true"/"false", the
    way the browser-side template engine renders them; everything else
    uses str().
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def coerce_args(key: str, args: Iterable[object] | None) -> Sequence[object]:
    """Normalize lookup arguments to a sequence.

    Raises:
        TypeError: If args is a string, bytes, or not iterable. A bare string
            would otherwise be split into characters.
    """
    if args is None:
        return ()
    if isinstance(args, (str, bytes)) or not isinstance(args, Iterable):
        raise TypeError(ErrorTemplate.invalid_arguments(key, args).message)
    if isinstance(args, Sequence):
        return args
    return tuple(args)


class TemplateResolver:
    """Resolves templates against positional arguments.

    Stateless apart from the policy; one instance is shared by every lookup
    of a registry and is safe to use from many threads.

    Example:
        >>> resolver = TemplateResolver()
        >>> template = parse_template("User {{[0]}} has been added to group {{[1]}}")
        >>> resolver.resolve("service:id:added-member", template, ["alice", "admins"])
        'User alice has been added to group admins'
    """

    __slots__ = ("_policy",)

    def __init__(self, policy: PlaceholderPolicy = PlaceholderPolicy.KEEP) -> None:
        self._policy = PlaceholderPolicy(policy)

    @property
    def policy(self) -> PlaceholderPolicy:
        """Out-of-range placeholder policy (read-only)."""
        return self._policy

    def resolve(self, key: str, template: Template, args: Sequence[object]) -> str:
        """Substitute every placeholder of template with its argument.

        Args:
            key: Message key (for diagnostics)
            template: Parsed template
            args: Positional arguments

        Returns:
            Fully substituted string

        Raises:
            PlaceholderIndexOutOfRangeError: Under PlaceholderPolicy.RAISE, if a
                placeholder index is >= len(args)
        """
        if template.is_static:
            return template.source

        parts: list[str] = []
        for element in template.elements:
            match element:
                case TextElement(value=value):
                    parts.append(value)
                case Placeholder(index=index) if index < len(args):
                    parts.append(stringify_argument(args[index]))
                case Placeholder():
                    parts.append(self._out_of_range(key, template, element, len(args)))
        return "".join(parts)

    def _out_of_range(
        self, key: str, template: Template, placeholder: Placeholder, arg_count: int
    ) -> str:
        diagnostic = ErrorTemplate.placeholder_out_of_range(key, placeholder.index, arg_count)
        match self._policy:
            case PlaceholderPolicy.RAISE:
                raise PlaceholderIndexOutOfRangeError(
                    diagnostic, key=key, index=placeholder.index, arg_count=arg_count
                )
            case PlaceholderPolicy.EMPTY:
                logger.warning("%s; substituting empty string", diagnostic.message)
                return ""
            case _:
                logger.warning("%s; leaving placeholder in place", diagnostic.message)
                return template.source[placeholder.span.start : placeholder.span.end]
