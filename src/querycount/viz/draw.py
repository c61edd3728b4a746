from __future__ import annotations

from typing import List, Optional

import networkx as nx
import matplotlib.pyplot as plt

from querycount.counting.index import CanonicalIndex
from querycount.io.nxgraph import skeleton_to_nx
from querycount.io.report import sorted_classes
from .layouts import pattern_layout


def draw_pattern_classes(
    index: CanonicalIndex,
    *,
    seed: int = 7,
    node_size: int = 600,
    max_classes: Optional[int] = None,
    save_prefix: str | None = None,
) -> List[str]:
    """
    Draw one figure per isomorphism class representative, vertex labels
    drawn on the nodes and the accumulated count in the title.

    If save_prefix is set, saves PNG files
      {save_prefix}_node{node_id}_{i}.png
    and returns their paths; otherwise shows each figure.
    """
    saved: List[str] = []
    classes = sorted_classes(index)
    if max_classes is not None:
        classes = classes[:max_classes]

    for i, cls in enumerate(classes):
        G = skeleton_to_nx(cls.representative)
        pos = pattern_layout(G, seed=seed)

        fig, ax = plt.subplots(figsize=(5, 5))
        ax.set_title(
            f"node {cls.node_id}   count={cls.count}   "
            f"|V|={G.number_of_nodes()}  |E|={G.number_of_edges()}"
        )
        ax.set_axis_off()
        nx.draw_networkx(
            G,
            pos=pos,
            ax=ax,
            labels={v: str(d["label"]) for v, d in G.nodes(data=True)},
            node_size=node_size,
            arrows=True,
        )
        plt.tight_layout()

        if save_prefix:
            path = f"{save_prefix}_node{cls.node_id}_{i}.png"
            plt.savefig(path, dpi=150)
            plt.close(fig)
            saved.append(path)
        else:
            plt.show()

    return saved
