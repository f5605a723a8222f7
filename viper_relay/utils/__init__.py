# Serialisation helpers used by the hashing pipeline.
