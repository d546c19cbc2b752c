# Units assumed for well-known fields loaded without an explicit unit.
known_other_fields = (
    ("density", "code_mass/code_length**3"),
    ("dark_matter_density", "code_mass/code_length**3"),
    ("number_density", "1/code_length**3"),
    ("pressure", "dyne/code_length**2"),
    ("specific_thermal_energy", "erg/g"),
    ("temperature", "K"),
    ("velocity_x", "code_length/code_time"),
    ("velocity_y", "code_length/code_time"),
    ("velocity_z", "code_length/code_time"),
    ("magnetic_field_x", "gauss"),
    ("magnetic_field_y", "gauss"),
    ("magnetic_field_z", "gauss"),
    ("metallicity", "Zsun"),
    ("metal_density", "code_mass/code_length**3"),
)

known_field_units = dict(known_other_fields)

# Geometric fields every stream dataset carries, with their units.
index_fields = (
    ("x", "code_length"),
    ("y", "code_length"),
    ("z", "code_length"),
    ("dx", "code_length"),
    ("dy", "code_length"),
    ("dz", "code_length"),
    ("cell_volume", "code_length**3"),
)
