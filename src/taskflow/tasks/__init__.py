"""
Task workflow subsystem.

Components:
- task_models.py: data structures (Task, Draft, Doer, RowPatch, column layout)
- row_mapper.py: sheet rows <-> typed records, encode_row() for writes
- dates.py: machine/display date conversion
- registry.py: fetched task snapshot, pending/history split, search
- drafts.py: per-task unsaved edits
- validation.py: which drafts may be submitted
- columns.py: which cells an action writes
- ids.py: next TN-<n> identifiers
- submission.py: sequential write-out of drafts
- roster.py / creation.py: doer list and bulk task creation
"""
