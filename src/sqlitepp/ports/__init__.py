"""Ports layer for sqlitepp.

Ports define the interfaces between the wrapper and the outside world.
The only outbound port is the embedded SQL engine.
"""

from sqlitepp.ports.outbound import Engine, Parameters, Statement

__all__ = ["Engine", "Parameters", "Statement"]
