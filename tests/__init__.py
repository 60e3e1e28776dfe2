"""
Time Registration Test Package

TEST AXIOMS:
=============
1. Determinism: fixed clock, hand-written entries, no wall-clock reads
2. Glitch freedom: listeners only see post-commit values
3. Explicit failure: misuse raises, never silently degrades
"""
