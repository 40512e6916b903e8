"""
Shared, cross-cutting code for the API.

`core/` should contain small building blocks that feature packages use
(DB wiring, typed errors, logging). Keep feature-specific SQL and business
logic in the corresponding feature package (e.g. `words/`).
"""
