from policy_extractor.rendering.renderer import render_policy

__all__ = ["render_policy"]
