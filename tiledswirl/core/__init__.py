"""Core animation primitives for Tiled Swirl.

Modules:
- config: session configuration + validation
- geometry: grid derivation from the viewport
- wavefield: spiral wave + tile sizing
- colors: per-cell palette table
- animator: frame loop orchestration
"""
