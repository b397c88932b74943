"""Terminal viewer for Twitch EventSub webhook subscriptions."""
