"""
Option pricing: analytic formulas and Monte Carlo simulation.
"""
