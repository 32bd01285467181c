"""pstattach - extract attachments from Outlook PST archives."""

__version__ = "0.1.0"
