# ABOUTME: Compiles caller-supplied CSS selector strings into reusable matchers.
# ABOUTME: Compiled selectors are immutable and shared read-only across worker threads.

import soupsieve
from soupsieve import SoupSieve

from feed_refurb.errors import SelectorCompileError

Selector = SoupSieve


def compile_selector(selector: str) -> Selector:
    """Compile a CSS selector once so it can be applied to many documents.

    Args:
        selector: CSS selector, e.g. ``".main-image,article"``.

    Returns:
        Compiled matcher.

    Raises:
        SelectorCompileError: If the selector is empty or not valid CSS.
    """
    if not selector.strip():
        raise SelectorCompileError(selector, "selector is empty")

    try:
        return soupsieve.compile(selector)
    except soupsieve.SelectorSyntaxError as e:
        raise SelectorCompileError(selector, str(e)) from e
