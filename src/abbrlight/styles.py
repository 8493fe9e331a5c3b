"""Style resolution.

Maps role tags to renderable style strings. A theme is a name prefix:
with theme "dark", the tag "alias" is looked up as "darkalias" first and
then as "alias". Unknown tags resolve to an empty (no-op) style.
"""

from abbrlight.config import get_theme_name
from abbrlight.constants import DEFAULT_STYLES


class StyleResolver:
    """Callable that resolves a role tag to a style string."""

    def __init__(self, styles: dict[str, str] | None = None, theme_name: str | None = None):
        self.styles = dict(DEFAULT_STYLES if styles is None else styles)
        self.theme_name = get_theme_name() if theme_name is None else theme_name

    def __call__(self, tag: str) -> str:
        if self.theme_name:
            themed = self.styles.get(self.theme_name + tag)
            if themed is not None:
                return themed
        return self.styles.get(tag, "")
