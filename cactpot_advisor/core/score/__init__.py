"""Next-reveal heuristics.

Two strategies are available and an engine is bound to one of them:
`coverage` ranks cells by how many lines pass through them, `information`
ranks them by how much revealing them would move the lines' expected payout.
"""
