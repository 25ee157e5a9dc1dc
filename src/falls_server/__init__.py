"""falls_server — FastAPI REST API for the falls-assessment engine.

Exposes the AssessmentEngine as a stateless HTTP API: per-instrument
scoring, whole-assessment aggregation and reference data endpoints.
"""
