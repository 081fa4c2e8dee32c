from mpm2d.presets.presets import configuration_list, elastic_model, fluid_model

__all__ = ["configuration_list", "elastic_model", "fluid_model"]
