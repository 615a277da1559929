"""
Built-in event templates.

The default catalog for the five timed task types: atmospheric flavor lines,
small info events, notable warnings and rare critical events. Message tokens
such as {gold} and {damage} are filled from the rolled effects (see
event_pacing.events.effect_rolls).
"""

from typing import Any, Optional

from event_pacing.data_models import (
    EffectKind,
    EffectRange,
    EventCategory,
    EventConditions,
    EventSeverity,
    EventTemplate,
    TaskType,
    VisualCue,
    VisualCueType,
)


RAID = TaskType.RAID
EXPEDITION = TaskType.EXPEDITION
CRAFT = TaskType.CRAFT


EVENT_TEMPLATES: list[EventTemplate] = [
    # =========================================================================
    # FLAVOR - atmosphere only, no effects
    # =========================================================================

    EventTemplate(
        template_id="flavor_bird_song",
        severity=EventSeverity.FLAVOR,
        category=EventCategory.FORTUNE,
        messages=(
            "A bird lands nearby and sings a pleasant melody.",
            "The sound of distant birdsong fills the air.",
        ),
        weight=10,
    ),
    EventTemplate(
        template_id="flavor_breeze",
        severity=EventSeverity.FLAVOR,
        category=EventCategory.FORTUNE,
        messages=(
            "A gentle breeze passes through.",
            "The wind picks up slightly, rustling nearby foliage.",
        ),
        weight=10,
        applicable_tasks=frozenset({EXPEDITION}),
    ),
    EventTemplate(
        template_id="flavor_footsteps",
        severity=EventSeverity.FLAVOR,
        category=EventCategory.MYSTERY,
        messages=(
            "You hear distant footsteps, but see nothing.",
            "Strange footsteps echo in the distance.",
        ),
        weight=8,
        applicable_tasks=frozenset({RAID, EXPEDITION}),
    ),
    EventTemplate(
        template_id="flavor_shadow",
        severity=EventSeverity.FLAVOR,
        category=EventCategory.MYSTERY,
        messages=(
            "A shadow passes overhead. Was it just a cloud?",
            "Something large briefly blocks out the sun.",
        ),
        weight=7,
    ),
    EventTemplate(
        template_id="flavor_inscription",
        severity=EventSeverity.FLAVOR,
        category=EventCategory.MYSTERY,
        messages=(
            "You notice ancient inscriptions on a nearby wall.",
            "Strange runes are carved into the stone here.",
        ),
        weight=6,
        applicable_tasks=frozenset({RAID}),
    ),

    # =========================================================================
    # INFO - small effects
    # =========================================================================

    EventTemplate(
        template_id="info_find_coins",
        severity=EventSeverity.INFO,
        category=EventCategory.LOOT,
        messages=(
            "You find {gold} gold coins on the ground!",
            "A small pouch contains {gold} gold.",
            "Loose coins totaling {gold} gold are scattered about.",
        ),
        effects={EffectKind.GOLD_MODIFIER: EffectRange(5, 15)},
        visual_cue=VisualCue(VisualCueType.SPARKLE, color="#FFD700"),
        weight=15,
    ),
    EventTemplate(
        template_id="info_find_materials",
        severity=EventSeverity.INFO,
        category=EventCategory.LOOT,
        messages=(
            "You gather {materials} useful materials.",
            "You find {materials} crafting materials lying around.",
        ),
        effects={EffectKind.MATERIALS_MODIFIER: EffectRange(2, 5)},
        visual_cue=VisualCue(VisualCueType.SPARKLE, color="#8B4513"),
        weight=15,
        applicable_tasks=frozenset({EXPEDITION, CRAFT}),
    ),
    EventTemplate(
        template_id="info_stumble",
        severity=EventSeverity.INFO,
        category=EventCategory.HAZARD,
        messages=(
            "You stumble over a root. -{damage} HP",
            "A loose stone causes you to trip. -{damage} HP",
        ),
        effects={EffectKind.HEALTH_MODIFIER: EffectRange(-8, -3)},
        visual_cue=VisualCue(VisualCueType.DAMAGE, color="#FF4444"),
        weight=12,
        applicable_tasks=frozenset({EXPEDITION}),
    ),
    EventTemplate(
        template_id="info_rest",
        severity=EventSeverity.INFO,
        category=EventCategory.HEALTH,
        messages=(
            "You take a moment to catch your breath. +{heal} HP",
            "A brief rest restores {heal} HP.",
        ),
        effects={EffectKind.HEALTH_MODIFIER: EffectRange(5, 12)},
        visual_cue=VisualCue(VisualCueType.SPARKLE, color="#44FF44"),
        weight=12,
    ),
    EventTemplate(
        template_id="info_friendly_npc",
        severity=EventSeverity.INFO,
        category=EventCategory.NPC,
        messages=(
            "A friendly traveler shares some provisions. +{heal} HP",
            "A merchant gives you a health tonic. +{heal} HP",
        ),
        effects={EffectKind.HEALTH_MODIFIER: EffectRange(8, 15)},
        visual_cue=VisualCue(VisualCueType.SPARKLE, color="#44FF44"),
        weight=10,
        applicable_tasks=frozenset({EXPEDITION}),
    ),
    EventTemplate(
        template_id="info_lucky_find",
        severity=EventSeverity.INFO,
        category=EventCategory.FORTUNE,
        messages=(
            "You feel lucky! Success chance +{success}%",
            "Good fortune smiles upon you. Success +{success}%",
        ),
        effects={EffectKind.SUCCESS_CHANCE_MODIFIER: EffectRange(2, 5)},
        visual_cue=VisualCue(VisualCueType.STAR, color="#FFD700"),
        weight=10,
    ),
    EventTemplate(
        template_id="info_unlucky_moment",
        severity=EventSeverity.INFO,
        category=EventCategory.FORTUNE,
        messages=(
            "You have a bad feeling about this. Success -{success}%",
            "Your luck seems to have run out. Success -{success}%",
        ),
        effects={EffectKind.SUCCESS_CHANCE_MODIFIER: EffectRange(-5, -2)},
        visual_cue=VisualCue(VisualCueType.WARNING, color="#FFA500"),
        weight=8,
    ),
    EventTemplate(
        template_id="info_find_herbs",
        severity=EventSeverity.INFO,
        category=EventCategory.LOOT,
        messages=(
            "You spot some medicinal herbs and gather them. +{materials} materials",
            "Useful herbs grow nearby. +{materials} materials",
        ),
        effects={EffectKind.MATERIALS_MODIFIER: EffectRange(1, 3)},
        weight=12,
        applicable_tasks=frozenset({EXPEDITION}),
    ),
    EventTemplate(
        template_id="info_minor_scratch",
        severity=EventSeverity.INFO,
        category=EventCategory.COMBAT,
        messages=(
            "A minor skirmish leaves you scratched. -{damage} HP",
            "You take a glancing blow. -{damage} HP",
        ),
        effects={EffectKind.HEALTH_MODIFIER: EffectRange(-10, -5)},
        visual_cue=VisualCue(VisualCueType.DAMAGE),
        weight=10,
        applicable_tasks=frozenset({RAID, EXPEDITION}),
    ),
    EventTemplate(
        template_id="info_motivational_thought",
        severity=EventSeverity.INFO,
        category=EventCategory.FORTUNE,
        messages=(
            "You recall your training. Success +{success}%",
            "A surge of confidence boosts your abilities. Success +{success}%",
        ),
        effects={EffectKind.SUCCESS_CHANCE_MODIFIER: EffectRange(3, 6)},
        weight=10,
    ),

    # =========================================================================
    # WARNING - notable effects
    # =========================================================================

    EventTemplate(
        template_id="warn_enemy_encounter",
        severity=EventSeverity.WARNING,
        category=EventCategory.COMBAT,
        messages=(
            "An enemy ambushes you! -{damage} HP",
            "You're attacked by a hostile creature! -{damage} HP",
            "Combat erupts! You take {damage} damage.",
        ),
        effects={
            EffectKind.HEALTH_MODIFIER: EffectRange(-25, -12),
            EffectKind.SUCCESS_CHANCE_MODIFIER: EffectRange(-8, -3),
        },
        visual_cue=VisualCue(VisualCueType.DAMAGE, color="#FF0000"),
        weight=8,
        applicable_tasks=frozenset({RAID, EXPEDITION}),
    ),
    EventTemplate(
        template_id="warn_treasure_found",
        severity=EventSeverity.WARNING,
        category=EventCategory.LOOT,
        messages=(
            "You discover a hidden cache! +{gold} gold",
            "A treasure trove! +{gold} gold",
            "Jackpot! You find {gold} gold coins!",
        ),
        effects={EffectKind.GOLD_MODIFIER: EffectRange(25, 50)},
        visual_cue=VisualCue(VisualCueType.TREASURE, color="#FFD700"),
        weight=12,
        applicable_tasks=frozenset({RAID}),
    ),
    EventTemplate(
        template_id="warn_trap",
        severity=EventSeverity.WARNING,
        category=EventCategory.HAZARD,
        messages=(
            "You trigger a trap! -{damage} HP",
            "A hidden mechanism activates! -{damage} HP",
            "Trapped! You take {damage} damage.",
        ),
        effects={EffectKind.HEALTH_MODIFIER: EffectRange(-30, -15)},
        visual_cue=VisualCue(VisualCueType.DAMAGE, color="#FF4444"),
        weight=10,
        applicable_tasks=frozenset({RAID}),
        conditions=EventConditions(requires_not_injured=True),
    ),
    EventTemplate(
        template_id="warn_equipment_damage",
        severity=EventSeverity.WARNING,
        category=EventCategory.EQUIPMENT,
        messages=(
            "Your equipment takes a beating. Durability -{durability}",
            "Your gear is damaged! Durability -{durability}",
        ),
        effects={EffectKind.DURABILITY_DAMAGE: EffectRange(10, 25)},
        visual_cue=VisualCue(VisualCueType.WARNING, color="#FFA500"),
        weight=8,
        applicable_tasks=frozenset({RAID}),
        conditions=EventConditions(requires_armor=True),
    ),
    EventTemplate(
        template_id="warn_theft",
        severity=EventSeverity.WARNING,
        category=EventCategory.ECONOMY,
        messages=(
            "A thief steals {gold} gold from you!",
            "You're robbed! Lost {gold} gold.",
        ),
        effects={EffectKind.GOLD_MODIFIER: EffectRange(-30, -15)},
        visual_cue=VisualCue(VisualCueType.WARNING, color="#FF6600"),
        weight=6,
        conditions=EventConditions(min_gold=20),
    ),
    EventTemplate(
        template_id="warn_mysterious_shrine",
        severity=EventSeverity.WARNING,
        category=EventCategory.MYSTERY,
        messages=(
            "You find a mysterious shrine. It grants you power! Success +{success}%",
            "An ancient altar bestows a blessing. Success +{success}%",
        ),
        effects={EffectKind.SUCCESS_CHANCE_MODIFIER: EffectRange(8, 15)},
        visual_cue=VisualCue(VisualCueType.STAR, color="#9966FF"),
        weight=7,
    ),
    EventTemplate(
        template_id="warn_cursed_item",
        severity=EventSeverity.WARNING,
        category=EventCategory.MYSTERY,
        messages=(
            "You touch a cursed item! Success -{success}%",
            "A dark energy weakens you. Success -{success}%",
        ),
        effects={EffectKind.SUCCESS_CHANCE_MODIFIER: EffectRange(-12, -6)},
        visual_cue=VisualCue(VisualCueType.SKULL, color="#660066"),
        weight=6,
        applicable_tasks=frozenset({RAID}),
    ),
    EventTemplate(
        template_id="warn_healing_fountain",
        severity=EventSeverity.WARNING,
        category=EventCategory.HEALTH,
        messages=(
            "You discover a healing fountain! +{heal} HP",
            "Magical waters restore your vitality. +{heal} HP",
        ),
        effects={EffectKind.HEALTH_MODIFIER: EffectRange(20, 40)},
        visual_cue=VisualCue(VisualCueType.SPARKLE, color="#44FFFF"),
        weight=10,
        applicable_tasks=frozenset({EXPEDITION}),
    ),
    EventTemplate(
        template_id="warn_material_cache",
        severity=EventSeverity.WARNING,
        category=EventCategory.LOOT,
        messages=(
            "A cache of rare materials! +{materials} materials",
            "You find a stash of valuable resources. +{materials} materials",
        ),
        effects={EffectKind.MATERIALS_MODIFIER: EffectRange(8, 15)},
        visual_cue=VisualCue(VisualCueType.TREASURE, color="#8B4513"),
        weight=10,
        applicable_tasks=frozenset({EXPEDITION, CRAFT}),
    ),
    EventTemplate(
        template_id="warn_friendly_guard",
        severity=EventSeverity.WARNING,
        category=EventCategory.NPC,
        messages=(
            "A friendly guard offers assistance. Success +{success}%",
            "You meet an experienced adventurer who gives advice. Success +{success}%",
        ),
        effects={EffectKind.SUCCESS_CHANCE_MODIFIER: EffectRange(5, 10)},
        weight=8,
        applicable_tasks=frozenset({RAID}),
    ),

    # =========================================================================
    # CRITICAL - significant effects, mostly once per session
    # =========================================================================

    EventTemplate(
        template_id="crit_boss_encounter",
        severity=EventSeverity.CRITICAL,
        category=EventCategory.COMBAT,
        messages=(
            "A powerful enemy appears! Massive fight! -{damage} HP, Success -{success}%",
            "Boss enemy blocks your path! -{damage} HP, Success -{success}%",
        ),
        effects={
            EffectKind.HEALTH_MODIFIER: EffectRange(-50, -30),
            EffectKind.SUCCESS_CHANCE_MODIFIER: EffectRange(-15, -8),
        },
        visual_cue=VisualCue(VisualCueType.SKULL, color="#FF0000"),
        weight=4,
        applicable_tasks=frozenset({RAID}),
        repeatable=False,
    ),
    EventTemplate(
        template_id="crit_legendary_loot",
        severity=EventSeverity.CRITICAL,
        category=EventCategory.LOOT,
        messages=(
            "LEGENDARY TREASURE! +{gold} gold, +{chests} chest, Success +{success}%!",
            "You've struck it rich! +{gold} gold and an extra chest!",
        ),
        effects={
            EffectKind.GOLD_MODIFIER: EffectRange(75, 150),
            EffectKind.EXTRA_CHESTS: EffectRange(1, 1),
            EffectKind.SUCCESS_CHANCE_MODIFIER: EffectRange(10, 20),
        },
        visual_cue=VisualCue(VisualCueType.STAR, color="#FFD700"),
        weight=3,
        applicable_tasks=frozenset({RAID}),
        repeatable=False,
    ),
    EventTemplate(
        template_id="crit_deadly_trap",
        severity=EventSeverity.CRITICAL,
        category=EventCategory.HAZARD,
        messages=(
            "DEADLY TRAP! Massive damage! -{damage} HP",
            "You trigger a catastrophic trap! -{damage} HP",
        ),
        effects={
            EffectKind.HEALTH_MODIFIER: EffectRange(-60, -35),
            EffectKind.SUCCESS_CHANCE_MODIFIER: EffectRange(-10, -5),
        },
        visual_cue=VisualCue(VisualCueType.SKULL, color="#FF0000"),
        weight=3,
        applicable_tasks=frozenset({RAID}),
        repeatable=False,
        conditions=EventConditions(min_health_percent=40),
    ),
    EventTemplate(
        template_id="crit_divine_blessing",
        severity=EventSeverity.CRITICAL,
        category=EventCategory.FORTUNE,
        messages=(
            "DIVINE BLESSING! Full heal and massive success boost! +{heal} HP, Success +{success}%",
            "The gods smile upon you! +{heal} HP, Success +{success}%",
        ),
        effects={
            EffectKind.HEALTH_MODIFIER: EffectRange(50, 100),
            EffectKind.SUCCESS_CHANCE_MODIFIER: EffectRange(15, 25),
        },
        visual_cue=VisualCue(VisualCueType.STAR, color="#FFFFFF"),
        weight=2,
        repeatable=False,
    ),
    EventTemplate(
        template_id="crit_equipment_break",
        severity=EventSeverity.CRITICAL,
        category=EventCategory.EQUIPMENT,
        messages=(
            "CRITICAL FAILURE! Your equipment is severely damaged! Durability -{durability}",
            "Your gear nearly breaks apart! Durability -{durability}",
        ),
        effects={
            EffectKind.DURABILITY_DAMAGE: EffectRange(40, 60),
            EffectKind.SUCCESS_CHANCE_MODIFIER: EffectRange(-12, -6),
        },
        visual_cue=VisualCue(VisualCueType.WARNING, color="#FF0000"),
        weight=2,
        applicable_tasks=frozenset({RAID}),
        conditions=EventConditions(requires_armor=True),
    ),
    EventTemplate(
        template_id="crit_master_thief",
        severity=EventSeverity.CRITICAL,
        category=EventCategory.ECONOMY,
        messages=(
            "A master thief robs you blind! -{gold} gold stolen!",
            "You're ambushed by a notorious bandit! Lost {gold} gold.",
        ),
        effects={
            EffectKind.GOLD_MODIFIER: EffectRange(-80, -40),
            EffectKind.HEALTH_MODIFIER: EffectRange(-20, -10),
        },
        visual_cue=VisualCue(VisualCueType.SKULL, color="#660000"),
        weight=2,
        repeatable=False,
        conditions=EventConditions(min_gold=50),
    ),
    EventTemplate(
        template_id="crit_ancient_power",
        severity=EventSeverity.CRITICAL,
        category=EventCategory.MYSTERY,
        messages=(
            "You awaken an ancient power! +{xp} XP, Success +{success}%",
            "Mystical energy surges through you! +{xp} XP, Success +{success}%",
        ),
        effects={
            EffectKind.XP_MODIFIER: EffectRange(50, 100),
            EffectKind.SUCCESS_CHANCE_MODIFIER: EffectRange(15, 20),
        },
        visual_cue=VisualCue(VisualCueType.STAR, color="#9966FF"),
        weight=3,
        applicable_tasks=frozenset({RAID}),
        repeatable=False,
        conditions=EventConditions(min_level=3),
    ),
    EventTemplate(
        template_id="crit_material_jackpot",
        severity=EventSeverity.CRITICAL,
        category=EventCategory.LOOT,
        messages=(
            "MATERIAL JACKPOT! +{materials} rare materials!",
            "You discover a massive resource vein! +{materials} materials",
        ),
        effects={
            EffectKind.MATERIALS_MODIFIER: EffectRange(25, 50),
            EffectKind.GOLD_MODIFIER: EffectRange(20, 40),
        },
        visual_cue=VisualCue(VisualCueType.TREASURE, color="#8B4513"),
        weight=3,
        applicable_tasks=frozenset({EXPEDITION, CRAFT}),
        repeatable=False,
    ),

    # =========================================================================
    # ADDITIONAL EVENTS
    # =========================================================================

    EventTemplate(
        template_id="info_weapon_sharpen",
        severity=EventSeverity.INFO,
        category=EventCategory.EQUIPMENT,
        messages=(
            "You sharpen your weapon. Success +{success}%",
            "Your blade gleams with renewed sharpness. Success +{success}%",
        ),
        effects={EffectKind.SUCCESS_CHANCE_MODIFIER: EffectRange(3, 6)},
        weight=8,
        conditions=EventConditions(requires_weapon=True),
    ),
    EventTemplate(
        template_id="flavor_campfire",
        severity=EventSeverity.FLAVOR,
        category=EventCategory.NPC,
        messages=(
            "You spot a distant campfire. Other adventurers nearby?",
            "Smoke rises in the distance. Signs of civilization.",
        ),
        weight=8,
        applicable_tasks=frozenset({EXPEDITION}),
    ),
    EventTemplate(
        template_id="info_animal_companion",
        severity=EventSeverity.INFO,
        category=EventCategory.FORTUNE,
        messages=(
            "A friendly animal follows you for a while. Success +{success}%",
            "You befriend a local creature. Success +{success}%",
        ),
        effects={EffectKind.SUCCESS_CHANCE_MODIFIER: EffectRange(2, 5)},
        weight=10,
        applicable_tasks=frozenset({EXPEDITION}),
    ),
    EventTemplate(
        template_id="warn_sudden_storm",
        severity=EventSeverity.WARNING,
        category=EventCategory.HAZARD,
        messages=(
            "A sudden storm rolls in! -{damage} HP, Success -{success}%",
            "Lightning strikes nearby! -{damage} HP, Success -{success}%",
        ),
        effects={
            EffectKind.HEALTH_MODIFIER: EffectRange(-20, -10),
            EffectKind.SUCCESS_CHANCE_MODIFIER: EffectRange(-8, -4),
        },
        visual_cue=VisualCue(VisualCueType.WARNING, color="#4444FF"),
        weight=7,
        applicable_tasks=frozenset({EXPEDITION}),
    ),
    EventTemplate(
        template_id="info_old_map",
        severity=EventSeverity.INFO,
        category=EventCategory.LOOT,
        messages=(
            "You find an old map. It might be valuable! +{gold} gold",
            "A treasure map! +{gold} gold",
        ),
        effects={EffectKind.GOLD_MODIFIER: EffectRange(10, 20)},
        weight=9,
    ),
    EventTemplate(
        template_id="warn_poison_dart",
        severity=EventSeverity.WARNING,
        category=EventCategory.HAZARD,
        messages=(
            "A poison dart grazes you! -{damage} HP",
            "You're hit by a poisoned projectile! -{damage} HP",
        ),
        effects={EffectKind.HEALTH_MODIFIER: EffectRange(-25, -15)},
        visual_cue=VisualCue(VisualCueType.DAMAGE, color="#00FF00"),
        weight=7,
        applicable_tasks=frozenset({RAID}),
    ),
    EventTemplate(
        template_id="flavor_echo",
        severity=EventSeverity.FLAVOR,
        category=EventCategory.MYSTERY,
        messages=(
            "Your footsteps echo strangely in this place.",
            "An eerie echo follows every sound.",
        ),
        weight=7,
        applicable_tasks=frozenset({RAID}),
    ),
    EventTemplate(
        template_id="info_hidden_passage",
        severity=EventSeverity.INFO,
        category=EventCategory.FORTUNE,
        messages=(
            "You discover a hidden passage! Success +{success}%",
            "A secret route opens up. Success +{success}%",
        ),
        effects={EffectKind.SUCCESS_CHANCE_MODIFIER: EffectRange(4, 8)},
        weight=9,
        applicable_tasks=frozenset({RAID}),
    ),
    EventTemplate(
        template_id="warn_collapsing_floor",
        severity=EventSeverity.WARNING,
        category=EventCategory.HAZARD,
        messages=(
            "The floor collapses beneath you! -{damage} HP",
            "You fall through a weak section! -{damage} HP",
        ),
        effects={EffectKind.HEALTH_MODIFIER: EffectRange(-28, -15)},
        visual_cue=VisualCue(VisualCueType.DAMAGE, color="#8B4513"),
        weight=6,
        applicable_tasks=frozenset({RAID}),
    ),
    EventTemplate(
        template_id="info_merchant_encounter",
        severity=EventSeverity.INFO,
        category=EventCategory.NPC,
        messages=(
            "You meet a traveling merchant. They buy some of your junk. +{gold} gold",
            "A merchant offers a fair trade. +{gold} gold",
        ),
        effects={EffectKind.GOLD_MODIFIER: EffectRange(8, 18)},
        weight=10,
        applicable_tasks=frozenset({EXPEDITION}),
    ),
    EventTemplate(
        template_id="warn_wild_beast",
        severity=EventSeverity.WARNING,
        category=EventCategory.COMBAT,
        messages=(
            "A wild beast attacks! -{damage} HP",
            "You're mauled by a predator! -{damage} HP",
        ),
        effects={EffectKind.HEALTH_MODIFIER: EffectRange(-30, -18)},
        visual_cue=VisualCue(VisualCueType.DAMAGE, color="#FF4444"),
        weight=9,
        applicable_tasks=frozenset({EXPEDITION}),
    ),
    EventTemplate(
        template_id="flavor_carved_statue",
        severity=EventSeverity.FLAVOR,
        category=EventCategory.MYSTERY,
        messages=(
            "An intricately carved statue watches over this area.",
            "Ancient statues line the walls, their eyes seem to follow you.",
        ),
        weight=8,
        applicable_tasks=frozenset({RAID}),
    ),
    EventTemplate(
        template_id="info_momentum",
        severity=EventSeverity.INFO,
        category=EventCategory.FORTUNE,
        messages=(
            "Everything is going smoothly! Success +{success}%",
            "You're in the zone! Success +{success}%",
        ),
        effects={EffectKind.SUCCESS_CHANCE_MODIFIER: EffectRange(3, 7)},
        weight=12,
    ),
    EventTemplate(
        template_id="info_fatigue",
        severity=EventSeverity.INFO,
        category=EventCategory.HEALTH,
        messages=(
            "Fatigue sets in. Success -{success}%",
            "You're getting tired. Success -{success}%",
        ),
        effects={EffectKind.SUCCESS_CHANCE_MODIFIER: EffectRange(-6, -3)},
        weight=10,
    ),
    EventTemplate(
        template_id="warn_chest_mimic",
        severity=EventSeverity.WARNING,
        category=EventCategory.COMBAT,
        messages=(
            "That chest was a mimic! -{damage} HP",
            "The treasure chest attacks! -{damage} HP",
        ),
        effects={
            EffectKind.HEALTH_MODIFIER: EffectRange(-25, -15),
            EffectKind.GOLD_MODIFIER: EffectRange(5, 15),
        },
        visual_cue=VisualCue(VisualCueType.DAMAGE, color="#FF6600"),
        weight=5,
        applicable_tasks=frozenset({RAID}),
    ),
    EventTemplate(
        template_id="info_lucky_dodge",
        severity=EventSeverity.INFO,
        category=EventCategory.COMBAT,
        messages=(
            "You narrowly dodge an attack!",
            "Your reflexes save you from harm!",
        ),
        effects={EffectKind.SUCCESS_CHANCE_MODIFIER: EffectRange(2, 4)},
        weight=10,
        applicable_tasks=frozenset({RAID}),
    ),
    EventTemplate(
        template_id="crit_earthquake",
        severity=EventSeverity.CRITICAL,
        category=EventCategory.HAZARD,
        messages=(
            "EARTHQUAKE! The ground shakes violently! -{damage} HP, Success -{success}%",
            "Massive tremors rock the area! -{damage} HP, Success -{success}%",
        ),
        effects={
            EffectKind.HEALTH_MODIFIER: EffectRange(-45, -25),
            EffectKind.SUCCESS_CHANCE_MODIFIER: EffectRange(-15, -8),
        },
        visual_cue=VisualCue(VisualCueType.WARNING, color="#8B4513"),
        weight=2,
        repeatable=False,
    ),
    EventTemplate(
        template_id="crit_phoenix_feather",
        severity=EventSeverity.CRITICAL,
        category=EventCategory.LOOT,
        messages=(
            "You find a PHOENIX FEATHER! Massive XP boost! +{xp} XP",
            "A legendary phoenix feather! +{xp} XP",
        ),
        effects={
            EffectKind.XP_MODIFIER: EffectRange(75, 150),
            EffectKind.SUCCESS_CHANCE_MODIFIER: EffectRange(10, 15),
        },
        visual_cue=VisualCue(VisualCueType.STAR, color="#FF6600"),
        weight=2,
        repeatable=False,
        conditions=EventConditions(min_level=5),
    ),
    EventTemplate(
        template_id="info_good_vibes",
        severity=EventSeverity.INFO,
        category=EventCategory.FORTUNE,
        messages=(
            "You feel good about this task. Success +{success}%",
            "Positive energy surrounds you. Success +{success}%",
        ),
        effects={EffectKind.SUCCESS_CHANCE_MODIFIER: EffectRange(2, 5)},
        weight=12,
    ),
    EventTemplate(
        template_id="warn_armor_crack",
        severity=EventSeverity.WARNING,
        category=EventCategory.EQUIPMENT,
        messages=(
            "Your armor develops a crack! Durability -{durability}",
            "A heavy blow damages your armor. Durability -{durability}",
        ),
        effects={EffectKind.DURABILITY_DAMAGE: EffectRange(15, 30)},
        weight=7,
        applicable_tasks=frozenset({RAID}),
        conditions=EventConditions(requires_armor=True),
    ),
]


def get_event_template(template_id: str) -> Optional[EventTemplate]:
    """Look up a built-in template by ID."""
    for template in EVENT_TEMPLATES:
        if template.template_id == template_id:
            return template
    return None


def get_event_statistics(templates: Optional[list[EventTemplate]] = None) -> dict[str, Any]:
    """Counts by severity and category over a template list (built-ins by default)."""
    templates = EVENT_TEMPLATES if templates is None else templates
    return {
        "total": len(templates),
        "by_severity": {
            severity.value: sum(1 for t in templates if t.severity == severity)
            for severity in EventSeverity
        },
        "by_category": {
            category.value: sum(1 for t in templates if t.category == category)
            for category in EventCategory
        },
        "repeatable": sum(1 for t in templates if t.repeatable),
        "non_repeatable": sum(1 for t in templates if not t.repeatable),
    }
