"""
Google Calendar export.

Components:
- auth.py: authorization state machine (typed events)
- events.py: task -> calendar event mapping
- sync.py: sequential, continue-on-error export of due-dated tasks
- exporter.py: ties the state machine, gateway and sync together
- google_gateway.py: CalendarGateway over googleapiclient + google-auth-oauthlib
"""
