"""Email and in-app notifications for payment events."""
