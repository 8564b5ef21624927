from mac_blueprint.adapters.blueprint_store import BlueprintLoadError, load_blueprint, save_blueprint

__all__ = ["BlueprintLoadError", "load_blueprint", "save_blueprint"]
