"""
Recommendation engine: turns catalog book templates into ranked, explained
recommendations for one focus area.

Modules
-------
scorer  : ScoreComponents dataclass + compute_score() + priority_level()
          + similarity / search / personalized scores (pure functions).
ranker  : ScoredTemplate dataclass + score_templates() + rank() + top_n().
explain : Reason / insight / challenge sentence selection with an injected
          random source; format_recommendations().
daily   : SeededGenerator LCG + date-stable book and insight of the day.
profile : analyze_reading_profile() over a reader's history.
engine  : BookRecommender, the public operations over a Catalog.
"""
