from . import cut_region, disk, point, ray, region, slices, spheroids
