"""Terminal flashcard quiz."""
