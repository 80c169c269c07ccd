"""
Tabs Module - Single active category over a small closed set
"""

from typing import Any, Dict, Iterable, Tuple


ABOUT_TABS = ('skills', 'experience', 'education')


class TabSelector:
    """Holds one active category; exactly one content block is visible"""

    def __init__(self, categories: Iterable[str] = ABOUT_TABS):
        self.categories: Tuple[str, ...] = tuple(dict.fromkeys(categories))
        if not self.categories:
            raise ValueError('TabSelector needs at least one category')
        self._active = self.categories[0]

    @property
    def active(self) -> str:
        return self._active

    def select(self, category: str) -> bool:
        """Activate ``category``; returns False when it was already active"""
        if category not in self.categories:
            raise ValueError(f"Unknown tab: {category!r}")
        if category == self._active:
            return False
        self._active = category
        return True

    def is_active(self, category: str) -> bool:
        return category == self._active

    def visible_blocks(self, blocks: Dict[str, Any]) -> Dict[str, bool]:
        return {category: self.is_active(category) for category in self.categories
                if category in blocks}

    def render(self, blocks: Dict[str, Any]) -> Any:
        return blocks[self._active]


__all__ = ['ABOUT_TABS', 'TabSelector']
