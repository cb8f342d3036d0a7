class MockNFC:
    """Testing NFC implementation that reads tag URLs from stdin."""

    def read_tag(self):
        """Block until the user types a tag URL and presses Enter."""
        return input("Tap tag (or type URL): ").strip()
