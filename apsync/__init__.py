"""
apsync - Archipelago multiworld client core.

A tick-driven reconciliation engine that keeps a running game session in step
with an Archipelago coordination server. The engine provides:
- Connection event classification and a bounded log buffer
- Idempotent, rate-limited item delivery
- Location check reporting and shop hints
- Death link negotiation with amnesty
- One-shot goal notification
"""

__version__ = "0.1.0"
