"""
Real-time notifications.

Services publish typed events on an ``EventBus``; the bus hands them to the
configured delivery backend only after the surrounding transaction commits.
Invitation events are addressed to a user channel, list events to a group
channel.
"""
