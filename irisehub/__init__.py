"""
iRiseHub content API.

Admins, moderated success stories, news, events and event bookings.
"""
