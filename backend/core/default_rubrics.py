"""
Default Screening Rubrics

Used when no rubric config has been saved to blob storage. Screening is
based on Title, Abstract, Year of publication and Journal.
"""

DEFAULT_INCLUSION_RULES = """- RI1: The authors explicitly state that it is about the design, development, and/or validation of a measurement instrument, and the study involves machine learning (ML) that is applied to measurement problems.
- RI2: The authors explicitly state that it is a conceptual article related to measurement, and the study involves ML that is applied to measurement problems.
- RI3: The study involves creating automated scoring models of behavioral data.
- RI4: The study involves applying ML methods to one of the procedures listed in the List of a Psychometrician's Job below.
- RI5: The study is about methodological advancements of ML with reference to measurement applications or context.
- RI6a: A post-2000 article *studies ML methods* (without situating the methods in a non-measurement application or context) and is published on any of the journals listed next following the + signs.
    + Educational Measurement Issues and Practice, Journal of Educational Measurement, Journal of Computerized Adaptive Testing, Journal of Educational and Behavioral Statistics, Psychometrika, Psychological Methods, Behavioral Research Methods, Multivariate Behavioral Research, British Journal of Mathematical and Statistical Psychology, ETS research report;
    + Applied Psychological Measurement, Educational and Psychological Measurement, Applied Measurement in Education, Journal of Applied Measurement, Measurement: Interdisciplinary Research and Perspectives, Journal of Measurement and Evaluation in Education and Psychology, Measurement and Evaluation in Counseling and Development.
- RI6b: Same as RI6a except for replacing *studies ML methods* with *introduces software program(s) to carry out a ML method(s)*.
- RI7a: A pre-2000 article published in the RI6a journals that *studies ML methods* but has no explicit reference to measurement applications or context.
- RI7b: Same as RI7a except for replacing *studies ML methods* with *introduces software program(s) to carry out a ML method(s)*."""

DEFAULT_EXCLUSION_RULES = """- RE1: The intended outcome of the study is not assigning scores or labels to individuals (e.g., a pure methodological paper irrelevant to M and not included per RI6 or RI7, editorial piece)
- RE2: The study focuses on scientific discovery and discourse (e.g., cognitive process, predictors of an outcome, efficacy of an intervention, comparisons of an outcome across groups), building prediction models, or building recommendation systems, rather than engineering a measurement instrument or environment.
- RE3: The study is about assessment but not measurement. That is, the study involves gathering information about individuals, but generates neither a theory of latent constructs nor quantitative scores or labels of pre-specified latent constructs.
- RE4: The study is about measurement (e.g., psychometric properties of a scale), but it does not pertain to ML or the ML part of the article was not applied to the measurement problem.
- RE5: The labels/scores assigned to individuals are used only for group summaries, and the authors do not explicitly indicate that the scores/labels refer to latent properties of the individuals.
- RE6: The study focuses on developing or studying a learning environment rather than a measurement environment.
- RE7: Special rules of exclusion (see below section) applied to the method involved in the paper.
- RE8: This paper is an erratum of or an addendum to an existing paper (the double counting rule)."""

DEFAULT_SPECIAL_RULES = """- HMM: Exclude if HMM is the only statistical method that qualifies the study for inclusion AND HMM was NOT applied to natural language/text/sequence data to identify latent structures behind unstructured data.
- PCA: Exclude if PCA is the only statistical method that qualifies the study for inclusion AND PCA is NOT presented as a part of a ML scheme.
- OPT: Exclude if optimization methods (e.g., EM algorithm, genetic algorithm, simulated annealing) are the only statistical method that qualifies the study for inclusion AND they do NOT address typical computational challenges of ML applications such as large N or large P.
- CLU: Exclude if cluster analysis is the only statistical method that qualifies the study for inclusion AND it is applied as a general data analysis method rather than forming a measure or serving a psychometrician's job.
- PEN: Exclude if penalized estimation and regularization is the only statistical method that qualifies the study for inclusion AND it is NOT used for variable selection."""

DEFAULT_DEFINITIONS = """Definition of "measurement" in this project: The term "measurement" refers to "measurement in education and psychology", which involves assigning numbers to individual persons to reflect their trait level. We adopt a narrow definition that requires explicit attention to engineering a measurement instrument or environment that collects behavioral data so as to assign quantitative scores or labels of pre-specified latent constructs to individuals.

Definition of "machine learning" in this project: Besides the approaches commonly considered as in the scope of machine learning, also include the approaches listed in the "ML Terms" section below."""

DEFAULT_ML_TERMS = " OR\n".join([
    '"machine learning"', '"data mining"', '"supervised learning"', '"unsupervised learning"',
    '"naive Bayes"', '"nearest neighbors"', '"regularization"', '"elastic net"', '"lasso"',
    '"neural network"', '"deep learning"', '"transfer learning"', '"reinforcement learning"',
    '"auto encoder"', '"LSTM"', '"convolution"', '"perceptron"', '"Boltzmann machine"',
    '"decision tree"', '"random forest"', '"gradient boosting"', '"support vector machine"',
    '"natural language processing"', '"topic model"', '"latent Dirichlet allocation"',
    '"hidden Markov model"', '"principal component analysis"', '"cluster analysis"',
])

DEFAULT_PSYCHOMETRICIAN_JOBS = """- designing how a measurement instrument (e.g., a test) is scored
- standard-setting
- designing automated generation of items
- detecting cheating
- analyzing items
- calibrating item parameters
- characterizing examinee behavior
- validating a measurement instrument
- studying measurement models and algorithms
- studying the reliability of a measurement instrument
- other tasks that are similar or related to the above"""

DEFAULT_RUBRICS = {
    'inclusion_rules': DEFAULT_INCLUSION_RULES,
    'exclusion_rules': DEFAULT_EXCLUSION_RULES,
    'special_rules': DEFAULT_SPECIAL_RULES,
    'definitions': DEFAULT_DEFINITIONS,
    'ml_terms': DEFAULT_ML_TERMS,
    'psychometrician_jobs': DEFAULT_PSYCHOMETRICIAN_JOBS,
}
