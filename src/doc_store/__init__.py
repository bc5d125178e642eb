"""
Document Store - Embedded in-memory document database

A reference backend for database benchmarks that needs no external engine: named
collections of documents with CRUD, chained find cursors, and a staged
aggregation pipeline with grouping accumulators and cross-collection joins.
"""

__version__ = "0.1.0"
__author__ = "Systems Engineering Portfolio"
