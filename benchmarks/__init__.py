"""
Benchmark suite for jtree codec performance.

Compares jtree against standard JSON libraries including:
- Python standard library json
- orjson (C-optimized)
- ujson (ultra-fast JSON)

Measures decoding and encoding speed, structural operation cost and
memory usage across different document shapes.
"""
