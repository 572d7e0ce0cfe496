from dataclasses import dataclass

from .exceptions import LaunchFailure


@dataclass(frozen=True)
class Captured():
	"""Process ran and we have everything it wrote to stdout"""
	output: str
	returncode: int

	def __bool__(self) -> bool:
		return True

	def check(self) -> 'Captured':
		return self


@dataclass(frozen=True)
class Completed():
	"""Process ran (success) or could not be started/fed/waited for (not success, and failure says why)
	returncode is None if it never got that far"""
	success: bool
	returncode: int | None = None
	failure: LaunchFailure | None = None

	def __bool__(self) -> bool:
		return self.success

	def check(self) -> 'Completed':
		""":raises LaunchFailure: if this is not a success"""
		if self.failure:
			raise self.failure
		return self


LaunchResult = Captured | Completed
