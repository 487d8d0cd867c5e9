"""Simple in-memory store for design sessions."""

from __future__ import annotations

from typing import Dict
from uuid import uuid4

from models.design_models import GenerationSession


class SessionStore:
	"""Manage design sessions for the lifetime of the process."""

	def __init__(self) -> None:
		self._sessions: Dict[str, GenerationSession] = {}

	def create(self) -> GenerationSession:
		"""Create a new, empty session."""
		session_id = uuid4().hex
		state = GenerationSession(session_id=session_id)
		self._sessions[session_id] = state
		return state

	def get(self, session_id: str) -> GenerationSession:
		"""Return a session or raise KeyError if missing."""
		state = self._sessions.get(session_id)
		if state is None:
			raise KeyError(f"Session {session_id} not found")
		return state

	def discard(self, session_id: str) -> None:
		"""Drop a session and everything it holds."""
		if self._sessions.pop(session_id, None) is None:
			raise KeyError(f"Session {session_id} not found")

	def __len__(self) -> int:
		return len(self._sessions)
