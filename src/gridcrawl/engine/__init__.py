"""
Turn engine and game session.

Resolves one discrete command into a full game tick and owns the level
lifecycle (generation, advance on clear, reset on death).
"""
