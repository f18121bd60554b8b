"""
Automatic named-entity annotation of a parse tree.

``TreeAutoNer`` runs five detector passes over the leaves of one language
view of a tree, in this order:

    1. PERSON
    2. LOCATION
    3. ORGANIZATION
    4. MONEY
    5. TIME

then labels every leaf that is still unlabeled as NONE and hands the tree to
the persistence step. Labels are never overwritten, so the pass order is a
priority order: a word that is both a known person name and a money
trigger ends up PERSON. For example, with suitable gazetteers:

    [ORGANIZATION Türk Hava Yolları] bu [TIME Pazartesi'den] itibaren
    [LOCATION İstanbul] [LOCATION Ankara] güzergahı için indirimli
    satışlarını [MONEY 90 TL'den] başlatacağını açıkladı.

Detector selection happens at construction: pass a different detector tuple
(for example one built from another language's lexical predicates) instead
of subclassing.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from .detector import CategoryDetector, build_detectors, label_if_absent
from .gazetteer import Gazetteers
from .lexicon import turkish_predicates
from .models import LeafLabel, NamedEntityType, NerConfig, NerReport
from .tree import ParseNode, ParseTree, collect_nodes, is_leaf_node
from .tree_io import save_tree

logger = logging.getLogger(__name__)

TreeSaver = Callable[[ParseTree], object]


class TreeAutoNer:
    """Runs the detector passes, the NONE fill, and the save step over a tree."""

    def __init__(
        self,
        detectors: Sequence[CategoryDetector],
        config: NerConfig | None = None,
        saver: TreeSaver | None = save_tree,
    ) -> None:
        self.detectors = tuple(detectors)
        self.config = config or NerConfig()
        self.saver = saver

    def collect_leaves(self, tree: ParseTree) -> list[ParseNode]:
        """Leaves of the configured word view, in surface order."""
        return collect_nodes(
            tree.root, is_leaf_node(self.config.word_layer, self.config.empty_tag),
        )

    def fill_unlabeled(self, tree: ParseTree) -> int:
        """Label every leaf that no detector claimed as NONE."""
        filled = 0
        for leaf in self.collect_leaves(tree):
            if label_if_absent(leaf, NamedEntityType.NONE, self.config.ner_layer):
                filled += 1
        return filled

    def auto_ner(self, tree: ParseTree) -> NerReport:
        """
        Label every leaf of *tree* and save it.

        The tree is mutated in place. If a detector raises, the remaining
        passes and the save step are skipped and the tree is left partially
        labeled.

        Args:
            tree: The tree to annotate.

        Returns:
            An NerReport with the number of labels each pass wrote and the
            final label of every leaf.
        """
        assigned: dict[NamedEntityType, int] = {}
        for detector in self.detectors:
            # Collected per pass; earlier passes only change labels, never structure.
            leaves = self.collect_leaves(tree)
            assigned[detector.category] = assigned.get(detector.category, 0) + detector.detect(leaves)
        assigned[NamedEntityType.NONE] = self.fill_unlabeled(tree)

        report = self._build_report(tree, assigned)
        logger.info(
            "Labeled %d leaf(s): %s.",
            len(report.labels),
            ", ".join(f"{category.value}={count}" for category, count in assigned.items()),
        )

        if self.saver is not None:
            self.saver(tree)
        return report

    def _build_report(self, tree: ParseTree, assigned: dict[NamedEntityType, int]) -> NerReport:
        labels = [
            LeafLabel(
                index=index,
                word=leaf.get_layer(self.config.word_layer) or "",
                label=leaf.get_layer(self.config.ner_layer) or "",
            )
            for index, leaf in enumerate(self.collect_leaves(tree))
        ]
        source = str(tree.file_path) if tree.file_path is not None else None
        return NerReport(assigned=assigned, labels=labels, source=source)


def turkish_auto_ner(
    gazetteers: Gazetteers,
    config: NerConfig | None = None,
    saver: TreeSaver | None = save_tree,
) -> TreeAutoNer:
    """Auto-NER wired with the Turkish lexical triggers."""
    config = config or NerConfig()
    detectors = build_detectors(gazetteers, turkish_predicates(), config=config)
    return TreeAutoNer(detectors, config=config, saver=saver)
