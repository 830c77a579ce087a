"""
Utterance parsing module.

Extracts venues, order quantities and prices from transcribed speech.
"""
