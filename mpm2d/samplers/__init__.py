from mpm2d.samplers.random_sampler import RandomSampler

__all__ = ["RandomSampler"]
