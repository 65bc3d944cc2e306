from chattally.discord.cogs.answer_ingress import AnswerIngress

__all__ = ["AnswerIngress"]
