"""
DocRelay Backend — Application Package
=======================================

A thin HTTP relay in front of one MongoDB collection.

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │        Services (RecordService)     │  ← one driver call + error mapping
    ├─────────────────────────────────────┤
    │      Database (RecordStore)         │  ← shared AsyncMongoClient
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
