"""Game domain services: word lookup, rounds, telemetry and aggregation.

HTTP routes, socket handlers and CLI commands import from here, keeping
transport concerns separated from the rules of the game.
"""
