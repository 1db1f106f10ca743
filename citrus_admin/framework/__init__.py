"""
Framework Object Module.

Plain data holders for the test framework objects the console translates:
- actions: runtime test actions (send, receive, sleep, echo).
- endpoints: runtime endpoints and their configurations.
- definitions: XML-bound action definitions and endpoint bean models.
"""
