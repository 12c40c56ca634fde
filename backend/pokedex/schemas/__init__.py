"""Pydantic Schemas — dataset records, upstream payloads and API responses.

Invariants:
    - Schemas validate at system boundary (bulk source, upstream API, responses)
    - Record models are frozen: the dataset is immutable after load
"""
