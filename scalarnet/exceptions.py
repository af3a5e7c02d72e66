"""
exceptions.py
~~~~~~~~~~~~~

Errors raised by the network engine.
"""


class ContractViolation(ValueError):
    """
    A caller broke a precondition of the engine.

    Raised for mismatched vector widths and for calling ``backward``
    without a matching ``forward``. Not meant to be caught and retried.
    """
