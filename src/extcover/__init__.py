"""
go-ext-cover - function-level coverage for Go coverage profiles.

Turns a statement-level Go coverage profile into a report that also says,
for every declared function, whether it ran at all.
"""

__version__ = "0.1.0"
