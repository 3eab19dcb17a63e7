"""
Recommendation scoring engine.

Responsibilities:
- Derive a preference model (cuisine affinity, price level, known cities)
  from the user's rated restaurants.
- Score candidate restaurants with weighted heuristics on a 1-99 scale.
- Explain each score with up to three short match factors.
"""
