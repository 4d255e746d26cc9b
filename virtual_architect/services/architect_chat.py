"""Conversational helper answering questions about an analyzed floorplan."""

from __future__ import annotations

from textwrap import dedent

from virtual_architect.clients.gemini import GeminiClient, GeminiModelError

EMPTY_REPLY_FALLBACK = "I apologize, I couldn't generate a response."


class ArchitectChatService:
    """Generate one Virtual Architect reply per request; no history is kept."""

    def __init__(self, gemini_client: GeminiClient) -> None:
        self._gemini = gemini_client

    async def reply(self, *, message: str, analysis_context: str) -> str:
        """Ask Gemini to answer ``message`` grounded on ``analysis_context``.

        Raises ``GeminiModelError`` when the model is unavailable so the route
        can report the failure to the caller.
        """
        response = await self._gemini.generate_reply(
            system_instruction=build_system_instruction(analysis_context),
            message=message,
        )
        return response.strip() or EMPTY_REPLY_FALLBACK


def build_system_instruction(analysis_context: str) -> str:
    return dedent(
        """
        You are a Virtual Architect, an AI assistant specialized in analyzing
        floorplans and providing architectural advice. You have analyzed a
        floorplan with the following results:

        {context}

        Respond to the user's questions about their floorplan based on this
        analysis. Be helpful, specific, and provide actionable recommendations.
        If asked about something not covered in the analysis, you can make
        reasonable assumptions based on common architectural principles, but
        make it clear when you're making an assumption versus referring to the
        specific analysis. Keep responses concise and focused on architectural
        insights.
        """
    ).strip().format(context=analysis_context.strip())


__all__ = [
    "ArchitectChatService",
    "EMPTY_REPLY_FALLBACK",
    "GeminiModelError",
    "build_system_instruction",
]
