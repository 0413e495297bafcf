from skillbuilder.models.skill import Skill

__all__ = ["Skill"]
