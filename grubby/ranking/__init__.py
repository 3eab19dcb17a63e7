"""
Manual ranking of rated restaurants.

Responsibilities:
- Compute the canonical display order (manual rank first, then rating).
- Plan the minimal set of rank writes for a drag-and-drop move.
- Work out the rating interval that keeps a moved item consistent with its
  new neighbours.
"""
