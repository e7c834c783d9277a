"""JSON CRDT documents: logical timestamps, nodes, documents and patches."""