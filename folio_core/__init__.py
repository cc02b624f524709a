"""
Folio Core - analysis code behind the blog's tutorials and walkthroughs

This package contains the reusable pieces the posts illustrate, including:
- Post front-matter parsing and tag indexing
- Memoizing CSV loading and stock price ingestion
- Table sanity checks and Levenshtein name deduplication
- Technical trading indicators and strategy walkthroughs
- Single-asset backtests and performance metrics
- Textbook ML algorithms (k-means, decision trees, random forests)
"""

__version__ = "0.1.0"
