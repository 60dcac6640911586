"""Blueprint — construction-plan XML writer and reader."""

from .writer import build_plan_xml, parse_plan_xml, plan_id, XML_DECLARATION

__all__ = ["build_plan_xml", "parse_plan_xml", "plan_id", "XML_DECLARATION"]
