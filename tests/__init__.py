"""Test package for the pattern memory game.

Core tests exercise geometry, hover tracking, the pattern engine, the scene
machine and persistence without pygame. Smoke tests run the pygame shell
headlessly with SDL's dummy drivers. Run ``pytest`` from the project root.
"""
