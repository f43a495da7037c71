"""
Property-based testing using Hypothesis.

Modules:
    test_control_variate_properties: optimal coefficient, mean shift,
        uncorrelated control, elementwise combination
"""
