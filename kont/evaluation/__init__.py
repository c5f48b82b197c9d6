"""Evaluation engine: the CPS evaluator, application, handler search and lowering."""
