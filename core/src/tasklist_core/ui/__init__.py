"""Server-rendered task list UI.

Routes return either the full page or just the `#tasks` list fragment, so an
htmx client can swap the list in place after each mutation.
"""
