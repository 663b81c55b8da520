"""
Terminal-facing services: screen session, renderer and the game loop.
"""
