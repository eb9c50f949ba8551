from dependency_injector import containers, providers
from sqlalchemy.orm import Session

from bloomcrux.application.economy.use_cases.cosmetics_use_case import CosmeticsUseCase
from bloomcrux.application.economy.use_cases.finalize_mission_use_case import (
    FinalizeMissionUseCase,
)
from bloomcrux.application.economy.use_cases.streak_chest_use_case import StreakChestUseCase
from bloomcrux.application.economy.use_cases.wallet_use_case import WalletUseCase
from bloomcrux.application.identity.use_cases.provision_user_use_case import (
    ProvisionUserUseCase,
)
from bloomcrux.application.learning.use_cases.card_performance_use_case import (
    CardPerformanceUseCase,
)
from bloomcrux.application.learning.use_cases.complete_mission_use_case import (
    CompleteMissionUseCase,
)
from bloomcrux.application.learning.use_cases.deck_mastery_use_case import DeckMasteryUseCase
from bloomcrux.application.learning.use_cases.quest_mission_use_case import GetMissionUseCase
from bloomcrux.application.learning.use_cases.quest_progress_use_case import (
    QuestProgressUseCase,
)
from bloomcrux.application.learning.use_cases.review_use_case import ReviewUseCase
from bloomcrux.application.library.use_cases.card_use_case import CardUseCase
from bloomcrux.application.library.use_cases.deck_summary_use_case import GetDeckSummaryUseCase
from bloomcrux.application.library.use_cases.deck_use_case import DeckUseCase
from bloomcrux.application.library.use_cases.folder_use_case import FolderUseCase
from bloomcrux.infrastructure.economy.repositories.cosmetic_repository import CosmeticRepository
from bloomcrux.infrastructure.economy.repositories.streak_repository import StreakRepository
from bloomcrux.infrastructure.economy.repositories.wallet_repository import WalletRepository
from bloomcrux.infrastructure.economy.repositories.xp_event_repository import XpEventRepository
from bloomcrux.infrastructure.identity.repositories.user_repository import UserRepository
from bloomcrux.infrastructure.learning.repositories.bloom_mastery_repository import (
    BloomMasteryRepository,
)
from bloomcrux.infrastructure.learning.repositories.card_mastery_repository import (
    CardMasteryRepository,
)
from bloomcrux.infrastructure.learning.repositories.card_performance_repository import (
    CardPerformanceRepository,
)
from bloomcrux.infrastructure.learning.repositories.mission_attempt_repository import (
    MissionAttemptRepository,
)
from bloomcrux.infrastructure.learning.repositories.quest_progress_repository import (
    QuestProgressRepository,
)
from bloomcrux.infrastructure.library.repositories.card_repository import CardRepository
from bloomcrux.infrastructure.library.repositories.deck_repository import DeckRepository
from bloomcrux.infrastructure.library.repositories.folder_repository import FolderRepository


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    # Declare db as a dependency that will be provided at runtime
    db = providers.Dependency(instance_of=Session)

    # Repositories
    user_repository = providers.Factory(UserRepository, db=db)
    folder_repository = providers.Factory(FolderRepository, db=db)
    deck_repository = providers.Factory(DeckRepository, db=db)
    card_repository = providers.Factory(CardRepository, db=db)
    card_mastery_repository = providers.Factory(CardMasteryRepository, db=db)
    card_performance_repository = providers.Factory(CardPerformanceRepository, db=db)
    bloom_mastery_repository = providers.Factory(BloomMasteryRepository, db=db)
    mission_attempt_repository = providers.Factory(MissionAttemptRepository, db=db)
    quest_progress_repository = providers.Factory(QuestProgressRepository, db=db)
    wallet_repository = providers.Factory(WalletRepository, db=db)
    xp_event_repository = providers.Factory(XpEventRepository, db=db)
    streak_repository = providers.Factory(StreakRepository, db=db)
    cosmetic_repository = providers.Factory(CosmeticRepository, db=db)

    # Identity module
    provision_user_use_case = providers.Factory(
        ProvisionUserUseCase,
        user_repository=user_repository,
    )

    # Library module, application use cases
    folder_use_case = providers.Factory(
        FolderUseCase,
        folder_repository=folder_repository,
        deck_repository=deck_repository,
    )
    deck_use_case = providers.Factory(
        DeckUseCase,
        deck_repository=deck_repository,
        card_repository=card_repository,
        folder_repository=folder_repository,
    )
    card_use_case = providers.Factory(
        CardUseCase,
        card_repository=card_repository,
        deck_repository=deck_repository,
    )
    deck_summary_use_case = providers.Factory(
        GetDeckSummaryUseCase,
        deck_repository=deck_repository,
        quest_progress_repository=quest_progress_repository,
        card_performance_repository=card_performance_repository,
    )

    # Learning module, application use cases
    get_mission_use_case = providers.Factory(
        GetMissionUseCase,
        deck_repository=deck_repository,
        card_repository=card_repository,
        card_performance_repository=card_performance_repository,
        card_mastery_repository=card_mastery_repository,
    )
    complete_mission_use_case = providers.Factory(
        CompleteMissionUseCase,
        deck_repository=deck_repository,
        card_repository=card_repository,
        mission_attempt_repository=mission_attempt_repository,
        quest_progress_repository=quest_progress_repository,
        bloom_mastery_repository=bloom_mastery_repository,
        card_performance_repository=card_performance_repository,
    )
    quest_progress_use_case = providers.Factory(
        QuestProgressUseCase,
        deck_repository=deck_repository,
        card_repository=card_repository,
        quest_progress_repository=quest_progress_repository,
        mission_attempt_repository=mission_attempt_repository,
        card_performance_repository=card_performance_repository,
        card_mastery_repository=card_mastery_repository,
        bloom_mastery_repository=bloom_mastery_repository,
        xp_event_repository=xp_event_repository,
    )
    card_performance_use_case = providers.Factory(
        CardPerformanceUseCase,
        deck_repository=deck_repository,
        card_repository=card_repository,
        card_performance_repository=card_performance_repository,
    )
    review_use_case = providers.Factory(
        ReviewUseCase,
        deck_repository=deck_repository,
        card_repository=card_repository,
        card_mastery_repository=card_mastery_repository,
        card_performance_repository=card_performance_repository,
    )
    deck_mastery_use_case = providers.Factory(
        DeckMasteryUseCase,
        deck_repository=deck_repository,
        bloom_mastery_repository=bloom_mastery_repository,
        card_mastery_repository=card_mastery_repository,
    )

    # Economy module, application use cases
    wallet_use_case = providers.Factory(
        WalletUseCase,
        wallet_repository=wallet_repository,
    )
    finalize_mission_use_case = providers.Factory(
        FinalizeMissionUseCase,
        deck_repository=deck_repository,
        wallet_repository=wallet_repository,
        xp_event_repository=xp_event_repository,
        streak_repository=streak_repository,
    )
    streak_chest_use_case = providers.Factory(
        StreakChestUseCase,
        streak_repository=streak_repository,
        wallet_repository=wallet_repository,
        xp_event_repository=xp_event_repository,
    )
    cosmetics_use_case = providers.Factory(
        CosmeticsUseCase,
        cosmetic_repository=cosmetic_repository,
        wallet_repository=wallet_repository,
        xp_event_repository=xp_event_repository,
    )


# Initialize container
container = Container()
