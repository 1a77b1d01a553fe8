"""Text comparison primitives: tokenization, similarity, n-grams and diffs."""
