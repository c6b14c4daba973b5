# Path: core/assistant/__init__.py
# Purpose: Package initializer for the text consultant.
# Layer: core/assistant.
# Details: Exposes prompt formatting and the consultant service.

from .consultant import ConsultantReply, CreativeConsultant, build_instruct_prompt, parse_reply

__all__ = ["ConsultantReply", "CreativeConsultant", "build_instruct_prompt", "parse_reply"]
