# CLI package for fairshare
"""
Command-line shell around the scoring pipeline.

Commands:
    fairshare rank   — Show ranked leaves
    fairshare stats  — Show tree statistics
"""
