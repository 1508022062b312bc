"""Chat bot message and UI builders."""
