"""Core arithmetic and configuration for the BetWise stake calculator.

This package contains pure building blocks:

- ``stake_math``        - payouts, stake recommendations, budget splitting,
                          investment analysis
- ``budget_mode``       - the ``TargetPayout | MaxBudget`` settings variant
- ``parsing``           - raw user text to optional numbers
- ``calculator_config`` - rounding, tolerance and display constants

Nothing in this package imports from ``betwise.services`` or ``betwise.schemas``.
All modules are side-effect-free and unit-testable in isolation.
"""
