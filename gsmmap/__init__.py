"""Encode and decode GSM MAP short-message operations: SRI-for-SM, MT-ForwardSM and MO-ForwardSM."""

__version__ = "0.1.0"