"""Recommendation catalogs.

A catalog yields baseline items first, then the items for the assessed
category, then items conditioned on selected input flags. The same inputs
always give the same list in the same order.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from clinical_risk.services.scoring.models import RiskCategory


@dataclass(frozen=True)
class ConditionalItem:
    """Guidance added when ``flag`` is set.

    When ``categories`` is non-empty the item applies only to those.
    """

    flag: str
    text: str
    categories: frozenset[RiskCategory] = field(default_factory=frozenset)

    def applies(self, category: RiskCategory, flags: frozenset[str]) -> bool:
        if self.flag not in flags:
            return False
        return not self.categories or category in self.categories


@dataclass(frozen=True)
class RecommendationCatalog:
    baseline: tuple[str, ...] = ()
    by_category: Mapping[RiskCategory, tuple[str, ...]] = field(default_factory=dict)
    conditional: tuple[ConditionalItem, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "by_category", MappingProxyType(dict(self.by_category)))

    def recommend(self, category: RiskCategory, flags: Iterable[str] = ()) -> list[str]:
        """Ordered, de-duplicated guidance for ``category`` and ``flags``."""
        flags = frozenset(flags)
        items = list(self.baseline)
        items.extend(self.by_category.get(category, ()))
        items.extend(item.text for item in self.conditional if item.applies(category, flags))

        result: list[str] = []
        for text in items:
            if text not in result:
                result.append(text)
        return result

    def covers(self, categories: Iterable[RiskCategory]) -> bool:
        """True when every category gets at least one item with no flags set."""
        return all(self.recommend(category) for category in categories)
