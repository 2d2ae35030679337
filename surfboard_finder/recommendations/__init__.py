"""
Recommendation engine: scores boards against a rider query and derives the
ranked match list, the per-shaper top picks, and side-by-side comparisons.

Modules
-------
scorer  : heuristic_volume() + ScoreComponents + compute_score() /
          score_board() — pure functions, no I/O.
ranker  : ScoredBoard / TopPick / RankedCatalog + rank_catalog() and its
          filter / sort / brand-grouping steps.
compare : toggle_compare() + build_comparison() for up to four boards.
"""
