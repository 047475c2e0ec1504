"""
Tests for the Vendor Risk Evaluation Engine.

This package contains tests for:
- Score normalization and aggregation
- Obligation (expiry / overdue) evaluation
- Workflow completion tracking
- Monthly trends
- Scorecard and monitoring thresholds
- Records, sample data and configuration
- Alerting and the evaluation engine
"""
