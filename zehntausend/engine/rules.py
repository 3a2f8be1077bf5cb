"""Zehntausend - Rules text shown to humans and sent to hosted models."""

RULES_MARKDOWN = """\
**Goal:** First to the target score (10,000 by default) wins!

**Rolling:**
- Every turn starts with six dice already rolled
- Keep at least one scoring die, then roll the rest or bank
- **Farkle** = freshly rolled dice contain nothing that scores: lose the turn's points
- **Hot Hand** = all six dice set aside: roll all six again and keep your points

**Keeping dice:**
- Kept dice can be released until you roll again; then they are banked for the turn
- Picking one die of a three-of-a-kind keeps the set; extra dice of the face can be added one by one

**Scoring:**
| Combo | Points |
|---|---|
| Single 1 | 100 |
| Single 5 | 50 |
| Three 1s | 1,000 |
| Three 2s-6s | Face x 100 |
| Four+ of a kind | Previous x 2 |
"""

FIXED_TABLE_NOTE = """\
**Fixed-table variant:** four of a kind scores face x 1,000 instead of doubling,
and four 1s win the game outright.
"""
