"""Outbound ports (driven adapters).

Exports:
    - Engine: Protocol for the embedded SQL engine connection
    - Statement: Protocol for a prepared, executing statement
    - Parameters: Positional or named parameter values for a statement
"""

from sqlitepp.ports.outbound.engine import Engine, Parameters, Statement

__all__ = ["Engine", "Parameters", "Statement"]
