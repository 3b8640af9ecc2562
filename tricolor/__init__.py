"""Lower bounds for weighted 3-colouring of graphs by packing edge-disjoint cliques."""

__version__ = "0.1.0"