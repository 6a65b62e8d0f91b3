"""
CLI Commands Module

- moon: One-shot Moon report
- track: Live tracking dashboard
- location: Observer location management
- settings: Engine settings
"""
