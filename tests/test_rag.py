import pytest

from ollama_rag import (
    Document,
    EmbeddingProvider,
    GenerationProvider,
    ProviderError,
    ProviderUnavailableError,
    RAGAnswer,
    RAGPipeline,
    VectorStore,
)


@pytest.fixture
def pipeline(store, generator):
    rag = RAGPipeline(store, generator)
    rag.add_document('js', 'JavaScript is used for web development')
    rag.add_document('py', 'Python is used for data science')
    return rag


def test_query_ranks_relevant_source_first(pipeline, generator):
    result = pipeline.query('What language is used for the web?')

    assert isinstance(result, RAGAnswer)
    assert result.answer == 'stub answer'
    assert [s.id for s in result.sources] == ['js', 'py']
    assert result.sources[0].similarity > result.sources[1].similarity
    assert len(generator.prompts) == 1


def test_prompt_contains_ranked_context_and_question(pipeline, generator):
    pipeline.query('What language is used for the web?')
    prompt = generator.prompts[0]

    context = 'JavaScript is used for web development\n\nPython is used for data science'
    assert context in prompt
    assert 'If the answer is not in the context, say so.' in prompt
    assert prompt.rstrip().endswith('Question: What language is used for the web?\n\nAnswer:')


def test_top_k_limits_sources(pipeline, generator):
    result = pipeline.query('What language is used for the web?', top_k=1)

    assert [s.id for s in result.sources] == ['js']
    assert 'Python is used for data science' not in generator.prompts[0]


def test_default_top_k(store, generator):
    rag = RAGPipeline(store, generator)
    assert rag.top_k == 3

    rag.add_documents([Document(f'd{i}', f'pizza number {i}') for i in range(5)])
    assert len(rag.query('pizza').sources) == 3


def test_empty_store_prompts_without_context(store, generator):
    rag = RAGPipeline(store, generator)
    result = rag.query('What is quantum computing?')

    assert result.sources == []
    assert result.answer == 'stub answer'
    assert len(generator.prompts) == 1
    assert 'No context was found' in generator.prompts[0]
    assert 'What is quantum computing?' in generator.prompts[0]


def test_build_context_empty(pipeline):
    assert pipeline.build_context([]) == ''


def test_generator_failure_propagates(pipeline):
    class FailingGenerator(GenerationProvider):
        def generate(self, prompt):
            raise ProviderError('model not found')

    pipeline.generator = FailingGenerator()
    with pytest.raises(ProviderError):
        pipeline.query('What language is used for the web?')
    assert pipeline.stats['queries_processed'] == 0


def test_get_stats(pipeline):
    pipeline.query('web')
    pipeline.query('data')

    stats = pipeline.get_stats()
    assert stats['queries_processed'] == 2
    assert stats['vector_store']['total_vectors'] == 2


def test_empty_store_with_unreachable_embedder_raises(generator):
    class DownEmbedding(EmbeddingProvider):
        def embed(self, text):
            raise ProviderUnavailableError('connection refused')

    rag = RAGPipeline(VectorStore(DownEmbedding()), generator)
    with pytest.raises(ProviderUnavailableError):
        rag.query('What is quantum computing?')
    assert generator.prompts == []


def test_empty_content_document_still_counts_as_context(store, generator):
    rag = RAGPipeline(store, generator)
    rag.add_document('blank', '')

    result = rag.query('pizza?')

    assert [s.id for s in result.sources] == ['blank']
    assert 'No context was found' not in generator.prompts[0]
    assert generator.prompts[0].startswith('Answer the following question based only on the provided context.')
