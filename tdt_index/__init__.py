"""Cross-document text-graph index package."""

from .occurrence import TokenOccurrence
from .adjacency import AdjacencyIndex, union_neighbor_maps
from .scores import ScoreIndex
from .counts import CountIndex
from .resolver import FacetDocumentResolver
from .config import GraphStoreContext
from .errors import IOFailure, InvalidArgument, NotFound, TextGraphIndexError
from .text_graph import GraphAggregator, LabelTable, TextGraph, build_text_graph
