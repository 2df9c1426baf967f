"""Similarity-based clustering of the entries in a VectorStore."""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from . import config
from .errors import InsufficientDataError
from .types import Entry
from .vector_store import VectorStore, cosine_similarity, similarity_matrix

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Cluster:
    """A group of entries sharing a centroid.

    Members are references into the store, not copies; a cluster is only
    meaningful while its entries are still stored.
    """
    index: int
    members: List[Entry] = field(default_factory=list)
    centroid: Optional[np.ndarray] = None

    @property
    def ids(self) -> List[str]:
        return [e.id for e in self.members]

    def __len__(self) -> int:
        return len(self.members)

    def __iter__(self):
        return iter(self.members)


class ClusterEngine:
    """Partitions a store with k-means-style centroid refinement over cosine similarity.

    Args:
        store: VectorStore whose current entries are clustered
        max_iterations: Cap on assignment/update rounds
        convergence_threshold: Stop once every centroid's cosine similarity
            to its previous position exceeds this value
        rng: numpy Generator used to pick initial centroids
        seed: Seed for a new Generator when rng is not given; None draws
            from system entropy
    """

    def __init__(self,
                 store: VectorStore,
                 max_iterations: Optional[int] = None,
                 convergence_threshold: Optional[float] = None,
                 rng: Optional[np.random.Generator] = None,
                 seed: Optional[int] = None):
        self.store = store
        self.max_iterations = config.CLUSTER_MAX_ITERATIONS if max_iterations is None else max_iterations
        self.convergence_threshold = (config.CLUSTER_CONVERGENCE_THRESHOLD
                                      if convergence_threshold is None else convergence_threshold)
        if self.max_iterations < 1:
            raise ValueError(f"max_iterations must be at least 1, got {self.max_iterations}")
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.iterations_run = 0

    def _initial_centroids(self, vectors: np.ndarray, num_clusters: int) -> np.ndarray:
        """Sample up to num_clusters distinct vectors as starting centroids."""
        _, first_seen = np.unique(vectors, axis=0, return_index=True)
        distinct = vectors[np.sort(first_seen)]
        count = min(num_clusters, len(distinct))
        picks = self.rng.choice(len(distinct), size=count, replace=False)
        return distinct[picks].copy()

    def cluster(self, num_clusters: int = 3) -> List[Cluster]:
        """Partition all entries into at most num_clusters non-empty clusters."""
        if num_clusters < 1:
            raise ValueError(f"num_clusters must be at least 1, got {num_clusters}")

        entries = self.store.entries
        if not entries:
            raise InsufficientDataError("Cannot cluster an empty store")
        if len(entries) < num_clusters:
            self.iterations_run = 0
            return [Cluster(index=0, members=list(entries))]

        vectors = np.vstack([e.vector for e in entries])
        ids = [e.id for e in entries]
        centroids = self._initial_centroids(vectors, num_clusters)

        assignments = None
        for iteration in range(1, self.max_iterations + 1):
            # argmax picks the lowest centroid index on ties
            assignments = np.argmax(similarity_matrix(vectors, centroids, ids), axis=1)

            converged = True
            for i in range(len(centroids)):
                assigned = vectors[assignments == i]
                if len(assigned) == 0:
                    continue
                new_centroid = assigned.mean(axis=0)
                if not np.any(new_centroid):
                    continue
                if cosine_similarity(centroids[i], new_centroid) <= self.convergence_threshold:
                    converged = False
                centroids[i] = new_centroid

            self.iterations_run = iteration
            if converged:
                logger.debug("Clustering converged after %d iterations", iteration)
                break
        else:
            logger.debug("Clustering stopped at the %d iteration cap", self.max_iterations)

        clusters = []
        for i, centroid in enumerate(centroids):
            members = [entries[j] for j in np.flatnonzero(assignments == i)]
            if members:
                clusters.append(Cluster(index=len(clusters), members=members, centroid=centroid.copy()))
        return clusters
