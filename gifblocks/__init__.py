"""
# gifblocks: the block level model of GIF files.

A GIF data stream is a sequence of blocks: most of them are chains of
self-describing, length prefixed sub-blocks and a lot of their header bytes
are packed fields, i.e. a single byte multiplexing several data items.

Two basic operations are defined for each component of the format:

 1. unpack(): read the binary data from a forward-only stream and build a
    high-level representation of it; the component knows how many bytes it
    needs and consumes exactly those (offset and size tell which ones).

 2. raw/pack(): encode the high-level representation into binary data.

Problems found while unpacking come in two flavours

 1. hard failures: an exception is raised and nothing is built
    (e.g. an identification block too short);
 2. soft status: the component is built anyway and carries a set of
    ErrorState flags with the messages describing them (e.g. the stream
    ended in the middle of a block). With Compliant.STATUS they are
    escalated to StatusException.

"""
