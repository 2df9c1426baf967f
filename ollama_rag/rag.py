"""Retrieval-augmented answering over a VectorStore."""

import logging
from typing import Dict, Iterable, List, Optional

from . import config
from .generation import GenerationProvider
from .types import Document, Entry, RAGAnswer, SearchResult, Source
from .vector_store import VectorStore

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = (
    "Answer the following question based only on the provided context. "
    "If the answer is not in the context, say so.\n\n"
    "Context:\n{context}\n\n"
    "Question: {question}\n\n"
    "Answer:"
)

NO_CONTEXT_PROMPT_TEMPLATE = (
    "No context was found for the following question: there are no stored "
    "documents to answer from. Do not make up an answer; say that the "
    "information is not available.\n\n"
    "Question: {question}\n\n"
    "Answer:"
)


class RAGPipeline:
    """Answers questions from the documents in a VectorStore.

    Retrieval is single-shot: one search, one generation call, no
    re-querying and no deduplication of near-identical sources.
    """

    def __init__(self, store: VectorStore, generator: GenerationProvider,
                 top_k: Optional[int] = None):
        self.store = store
        self.generator = generator
        self.top_k = config.RAG_TOP_K if top_k is None else top_k
        self.stats = {'queries_processed': 0}

    def add_document(self, id: str, content: str, metadata: Optional[Dict] = None) -> Entry:
        return self.store.add(id, content, metadata)

    def add_documents(self, documents: Iterable[Document]) -> List[Entry]:
        return self.store.add_documents(documents)

    def build_context(self, results: List[SearchResult]) -> str:
        """Join retrieved texts in rank order, separated by a blank line."""
        return "\n\n".join(r.entry.text for r in results)

    def build_prompt(self, question: str, results: List[SearchResult]) -> str:
        """Prompt over the retrieved results; no results gets the no-context prompt."""
        if not results:
            return NO_CONTEXT_PROMPT_TEMPLATE.format(question=question)
        return PROMPT_TEMPLATE.format(context=self.build_context(results), question=question)

    def query(self, question: str, top_k: Optional[int] = None) -> RAGAnswer:
        """Full RAG pipeline: retrieve and generate."""
        results = self.store.search(question, self.top_k if top_k is None else top_k)
        prompt = self.build_prompt(question, results)
        logger.debug("Answering with %d retrieved sources", len(results))

        answer = self.generator.generate(prompt)
        self.stats['queries_processed'] += 1
        return RAGAnswer(
            answer=answer,
            sources=[Source(id=r.entry.id, similarity=r.similarity) for r in results],
        )

    def get_stats(self) -> Dict:
        """Get pipeline statistics."""
        return {
            **self.stats,
            'vector_store': self.store.get_stats()
        }
