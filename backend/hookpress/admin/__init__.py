"""Admin screens: settings-page registry, anti-forgery tokens and views."""
