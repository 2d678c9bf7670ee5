"""Front ends: headless console runner and the Arcade window."""
