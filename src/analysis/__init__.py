"""Update checks against package registries."""
