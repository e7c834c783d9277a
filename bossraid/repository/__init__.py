"""In-memory storage for characters, games, items and rooms."""