from mac_blueprint.core.services.diff_engine import diff_blueprints
from mac_blueprint.core.services.restore_plan import RestorePlan, build_restore_plan

__all__ = ["RestorePlan", "build_restore_plan", "diff_blueprints"]
