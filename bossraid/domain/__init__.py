"""Game model: items, bosses, characters, rooms and games."""