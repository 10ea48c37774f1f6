"""
# pngme: hide messages inside PNG files.

A PNG file is seen as a fixed signature followed by a sequence of chunks, each
one made of a length, a type, the data and a CRC. The format is described
declaratively: a record (Chunk) is a class whose attributes are fields, and
two basic operations are defined for it and its sub components

 1. unpack(): reading the binary data and build a high-level representation
    of that; the record knows how many bytes each field needs to read and
    checks the consistency of what it read (see Chunk.validate()).

 2. raw: encode the high-level representation into binary data, i.e. the
    concatenation of the raw data of its fields.

A record built from scratch, i.e. from the values of its fields, calculates
the fields depending on others (like lengths and checksums) by itself.
"""
