"""CSV tokenizer and positional sheet interpreter for the production sheet."""
