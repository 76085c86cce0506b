# Fichier: train_classifier.py
"""Build the Sepitori classifier from the training corpus and save it to disk."""

import argparse
import logging
import sys
from pathlib import Path

# --- CONFIGURATION DU CHEMIN D'ACCÈS ---
current_dir = Path(__file__).parent.resolve()
if str(current_dir) not in sys.path:
    sys.path.insert(0, str(current_dir))

from sepitori.core.config import settings  # noqa: E402
from sepitori.nlp.bayes_classifier import BayesClassifier, ClassifierError  # noqa: E402
from sepitori.services.training_corpus import CorpusError, TrainingCorpus  # noqa: E402

logger = logging.getLogger(__name__)


def train_and_save_classifier(
    corpus_path: str | Path,
    model_path: str | Path,
    *,
    stem: bool = False,
    remove_stopwords: bool = False,
) -> BayesClassifier:
    """
    Load the corpus, fit a fresh classifier on every example and save it.

    Raises ClassifierError or CorpusError when a step fails.
    """
    logger.info("1/3 - Loading examples from '%s'...", corpus_path)
    examples = TrainingCorpus(corpus_path).load()
    if not examples:
        raise ClassifierError(f"No training examples in {corpus_path}")
    logger.info("📚 %s examples loaded.", len(examples))

    classifier = BayesClassifier(stem=stem, remove_stopwords=remove_stopwords)
    for example in examples:
        classifier.add_document(example["text"], example["label"])

    logger.info("2/3 - ⏳ Training classifier...")
    classifier.train()

    logger.info("3/3 - Saving model to '%s'...", model_path)
    classifier.save(model_path)

    logger.info("✅ Classifier trained and saved. Labels: %s", classifier.labels)
    return classifier


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Train the Sepitori classifier from the corpus")
    parser.add_argument("--corpus", default=settings.TRAINING_DATA_PATH, help="JSON Lines training corpus")
    parser.add_argument("--model", default=settings.MODEL_PATH, help="Where to write the trained model")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    try:
        train_and_save_classifier(
            args.corpus,
            args.model,
            stem=settings.USE_STEMMING,
            remove_stopwords=settings.REMOVE_STOPWORDS,
        )
    except (ClassifierError, CorpusError) as exc:
        logger.error("❌ Training failed: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
