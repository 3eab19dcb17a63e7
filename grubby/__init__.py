"""
Personalised ranking and recommendation core for the dining log.

Responsibilities:
- Keep a user's rated restaurants in a stable, manually reorderable order.
- Turn a drag-and-drop move into minimal rank writes and rating guidance.
- Score candidate restaurants against the user's history and taste profile.
"""
