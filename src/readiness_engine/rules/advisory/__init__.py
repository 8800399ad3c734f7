"""Advisory rules that add hints without changing the tag."""
