"""
pygame adapters: renderer, input handler and sound player.
These read and command the gameplay core but hold no game logic.
"""
