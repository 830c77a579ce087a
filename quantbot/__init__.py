"""
QuantBot - Conversational OTC Order Desk

A voice-driven front-end for placing simulated OTC crypto orders. Transcribed
caller utterances advance a per-call conversation state machine which
collects venue, symbol, quantity and limit price, then confirms the order.
"""

__version__ = "0.1.0"
__author__ = "QuantBot Team"
