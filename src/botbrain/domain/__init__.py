"""Domain logic: the decision engine and the bot games built on it."""
