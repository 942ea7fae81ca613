"""Engine-runtime globals the client loader installs before the runner starts.

The exported runner probes a fixed set of window-level hooks. Rather than
hand-writing each stub, the loader walks this table and installs a stub per
entry according to its `kind`.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

logger = logging.getLogger(__name__)


class StubKind(str, Enum):
	"""How the loader fills in a global."""

	SETTER = "setter"  # stores its argument into a paired global
	HANDLER_QUERY = "handler_query"  # reports whether a paired global holds a function
	HANDLER_INVOKE = "handler_invoke"  # JSON-decodes its argument and forwards it to a paired global
	DEFERRED_CALLBACK = "deferred_callback"  # invokes a callback argument after `delay_ms`
	TOGGLE_ELEMENT = "toggle_element"
	LOG_ONLY = "log_only"
	EVENT_MOCK = "event_mock"  # defines a no-op Event subclass when the browser lacks one


@dataclass(frozen=True, slots=True)
class CapabilityStub:
	name: str
	kind: StubKind
	description: str
	target: Optional[str] = None
	initial: Any = None
	delay_ms: int = 0
	callback_arg: Optional[Dict[str, str]] = None

	def to_payload(self) -> Dict[str, Any]:
		payload = asdict(self)
		payload["kind"] = self.kind.value
		return {key: value for key, value in payload.items() if value is not None}


CAPABILITIES: tuple[CapabilityStub, ...] = (
	CapabilityStub("setAddAsyncMethod", StubKind.SETTER, "Register the runner's async dispatch method", target="g_pAddAsyncMethod", initial=-1),
	CapabilityStub("setJSExceptionHandler", StubKind.SETTER, "Register a JS exception handler (functions only)", target="g_pJSExceptionHandler"),
	CapabilityStub("hasJSExceptionHandler", StubKind.HANDLER_QUERY, "Whether an exception handler is registered", target="g_pJSExceptionHandler"),
	CapabilityStub("doJSExceptionHandler", StubKind.HANDLER_INVOKE, "Forward a JSON exception to the registered handler", target="g_pJSExceptionHandler"),
	CapabilityStub("setWadLoadCallback", StubKind.SETTER, "Register the WAD/resource load callback", target="g_pWadLoadCallback"),
	CapabilityStub("onFirstFrameRendered", StubKind.LOG_ONLY, "First frame rendered notification"),
	CapabilityStub("triggerAd", StubKind.DEFERRED_CALLBACK, "Ad stub; completes immediately", delay_ms=100),
	CapabilityStub("triggerPayment", StubKind.DEFERRED_CALLBACK, "Payment stub; reports the item as purchased", delay_ms=1000, callback_arg={"id": "$itemId"}),
	CapabilityStub("toggleElement", StubKind.TOGGLE_ELEMENT, "Toggle an element between block and none display"),
	CapabilityStub("set_acceptable_rollback", StubKind.LOG_ONLY, "Multiplayer rollback window (ignored)"),
	CapabilityStub("report_stats", StubKind.LOG_ONLY, "Game stats report (ignored)"),
	CapabilityStub("log_next_game_state", StubKind.LOG_ONLY, "Game state logging request (ignored)"),
	CapabilityStub("wallpaper_update_config", StubKind.LOG_ONLY, "Wallpaper config update (ignored)"),
	CapabilityStub("wallpaper_reset_config", StubKind.LOG_ONLY, "Wallpaper config reset (ignored)"),
	CapabilityStub("DeviceMotionEvent", StubKind.EVENT_MOCK, "Accelerometer event class, avoids permissions policy errors"),
	CapabilityStub("DeviceOrientationEvent", StubKind.EVENT_MOCK, "Orientation event class, avoids permissions policy errors"),
)

# Used when runner.json is missing from the deployed client bundle
FALLBACK_MANIFEST: Dict[str, List[str]] = {
	"manifestFiles": [
		"runner.data",
		"runner.js",
		"runner.wasm",
		"audio-worklet.js",
		"game.unx",
	],
	"manifestFilesMD5": [
		"585214623b669175a702fed30de7d21d",
		"8669aa66d44cfb4f13a098cd6b0296e1",
		"d29ac123833b56dcfbe188f10e5ecb85",
		"e8f1e8db8cf996f8715a6f2164c2e44e",
		"00a26996df3ce310bb5836ef7f4b0e3c",
	],
}


class ManifestError(ValueError):
	"""Raised when a runner manifest lacks its file lists."""


def get_capability(name: str) -> Optional[CapabilityStub]:
	for stub in CAPABILITIES:
		if stub.name == name:
			return stub
	return None


def validate_manifest(payload: Mapping[str, Any]) -> Dict[str, List[str]]:
	"""Check a runner manifest and return just its file lists.

	Mismatched list lengths are tolerated with a warning; the runner only
	pairs entries positionally.
	"""
	files = payload.get("manifestFiles")
	hashes = payload.get("manifestFilesMD5")
	if not isinstance(files, list) or not isinstance(hashes, list):
		raise ManifestError("runner.json missing arrays")
	if len(files) != len(hashes):
		logger.warning("runner_manifest_length_mismatch", extra={"files": len(files), "hashes": len(hashes)})
	return {"manifestFiles": [str(item) for item in files], "manifestFilesMD5": [str(item) for item in hashes]}


def capabilities_payload() -> Dict[str, Any]:
	return {
		"capabilities": [stub.to_payload() for stub in CAPABILITIES],
		"fallbackManifest": validate_manifest(FALLBACK_MANIFEST),
	}
