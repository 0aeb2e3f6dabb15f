from jumpyball.course.level import Goal, Level, LevelStack, LevelTracker

__all__ = ["Goal", "Level", "LevelStack", "LevelTracker"]
