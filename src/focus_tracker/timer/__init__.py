"""
Focus timer subsystem.

Components:
- focus_timer.py: countdown state machine (start/pause/reset/tick)
- ticker.py: asyncio one-second cadence + background thread runner
"""
