"""Row normalization: turn a raw sheet grid into records.

- datetimes.py: best-effort date/time inference from loose cell text
- rows.py: header handling, date/time column discovery, Record type
"""
