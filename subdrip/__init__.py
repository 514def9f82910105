"""
Subdrip - Source Package

Core library for tracking recurring subscription payments: the
subscription model and its billing-date math, the persisted subscription
store, currency conversion and spending summaries.

DESIGN PRINCIPLES:
1. Derived values are computed, never stored
2. "Now" is always passed in explicitly
3. Bad stored data never crashes the app
4. Every change is auditable
5. Storage is swappable
"""

__version__ = "1.0.0"
__author__ = "Subdrip Team"
