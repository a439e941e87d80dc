"""
Recommendation engine: turns a registry's base ranking into an explained,
history-aware selection.

Modules
-------
tables        : curated constant tables (intent keywords, intent bonuses,
                strengths, legacy commands, journeys, intake questions).
scorer        : infer_intent() + classify_audience() + ScoreComponents +
                compute_score() + build_reason() + history_boost().
                Pure functions, no I/O.
history       : SelectionHistoryStore, per-user bounded FIFO with per-key locks.
compatibility : pairwise compatibility() + compatibility_matrix().
selector      : FrameworkSelector (criteria, history boost, rationale,
                diversification, journeys).
reporter      : write_selection_json() + write_matrix_json() +
                write_history_json() + load_history_json() +
                write_recommendations_csv(), file I/O.
"""
