"""Application services for items, characters, games and rooms."""