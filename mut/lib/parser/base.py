r"""
Brace placeholder interpolation.

Provides a parsing engine that substitutes ``{inner}`` spans using a
configurable resolver. The resolver is asked for ``inner`` and its answer
replaces the whole span, braces included.

The parser handles:
- Innermost-first resolution: the pattern never matches a span holding
  another brace, so ``{a_{b}}`` resolves ``{b}`` before ``{a_...}``
- Re-scanning the whole string after every substitution, so a resolver
  answer that contains ``{...}`` is expanded as well
- Escape sequences ``\{`` and ``\}`` for literal braces
- Mapping ``&`` to the legacy color marker once substitution is done

Resolvers must not answer with text that refers back to themselves; the
re-scan has no depth limit and would not terminate.

Example:
    parser = BraceTokenParser(resolver=ExternalResolver(placeholders))
    result = parser.parse("Rank: {luckperms_prefix}")
"""

import re
from typing import Callable, Final, Protocol, runtime_checkable, Self
from mut.models.dataModel import ParseResult
from mut.lib.log import LOG

_UNESCAPED_SPAN: Final[re.Pattern[str]] = re.compile(r"(?<!\\)\{([^{}]*)\}")
_ESCAPED_BRACE: Final[re.Pattern[str]] = re.compile(r"\\([{}])")


@runtime_checkable
class TokenResolver(Protocol):
    """Protocol defining the resolver interface for token substitution.

    Resolvers return ParseResult objects containing either the resolved
    value or error details.
    """

    def resolve(self: Self, token_value: str) -> ParseResult:
        """Resolve a token value to its substitution.

        Args:
            token_value: Text found between the braces

        Returns:
            ParseResult containing:
                - text: Resolved value if successful
                - error: Error message if resolution failed
                - success: Whether resolution succeeded
        """
        ...


class BraceTokenParser:
    """Brace placeholder parser using a resolver strategy.

    Attributes:
        resolver: Strategy for resolving token values
        color_marker: Replacement for every '&' in the final text
    """

    def __init__(self: Self, resolver: TokenResolver, color_marker: str | None = None) -> None:
        if color_marker is None:
            from mut.config.settings import appsettings

            color_marker = appsettings.colorMarker
        self.resolver: TokenResolver = resolver
        self.color_marker: str = color_marker

    def parse(self: Self, input_text: str) -> ParseResult:
        """Parse input text and process all brace substitutions.

        Args:
            input_text: Raw input string containing ``{...}`` spans

        Returns:
            ParseResult with processed text, or the first resolver error
        """
        if not input_text:
            return ParseResult(text="", error=None, success=True)

        text: str = input_text
        match: re.Match[str] | None = _UNESCAPED_SPAN.search(text)
        while match:
            resolved: ParseResult = self.resolver.resolve(match.group(1))
            if not resolved.success:
                LOG(f"Could not resolve {{{match.group(1)}}}: {resolved.error}")
                return resolved
            text = text[: match.start()] + resolved.text + text[match.end() :]
            match = _UNESCAPED_SPAN.search(text)

        text = _ESCAPED_BRACE.sub(r"\1", text)
        return ParseResult(
            text=text.replace("&", self.color_marker), error=None, success=True
        )


class _CallableResolver:
    """Adapts a plain ``name -> text`` function to the resolver protocol."""

    def __init__(self: Self, resolve: Callable[[str], str]) -> None:
        self._resolve: Callable[[str], str] = resolve

    def resolve(self: Self, token_value: str) -> ParseResult:
        try:
            return ParseResult(
                text=self._resolve(token_value), error=None, success=True
            )
        except Exception as e:
            return ParseResult(text="", error=str(e), success=False)


def interpolate(
    input_text: str, resolve: Callable[[str], str], color_marker: str | None = None
) -> str:
    """Interpolate ``{...}`` spans with a plain resolve function.

    Args:
        input_text: Text containing placeholder spans
        resolve: Maps the inner text of a span to its replacement
        color_marker: Replacement for '&' (settings default when None)

    Returns:
        The interpolated text, or the input unchanged if resolution failed
    """
    parser: BraceTokenParser = BraceTokenParser(
        resolver=_CallableResolver(resolve), color_marker=color_marker
    )
    result: ParseResult = parser.parse(input_text)
    return result.text if result.success else input_text
