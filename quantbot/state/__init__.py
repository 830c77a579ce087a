"""
Conversation state machine module.

Holds the per-call session record and the pure transition function that
walks a caller from venue selection to a confirmed simulated order.
"""
