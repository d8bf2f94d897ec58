"""Extract the mathematical expressions from a document as plain text."""
