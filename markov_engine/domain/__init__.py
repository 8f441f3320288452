# Domain layer: the chain engine, its models, and the domain drivers
# that parameterize it.
