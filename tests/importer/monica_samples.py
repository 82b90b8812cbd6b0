"""Monica SQL dumps shared by the importer tests."""

SAMPLE_DUMP = """-- Monica SQL export
SET NAMES utf8mb4;
/*!40101 SET @OLD_CHARACTER_SET_CLIENT=@@CHARACTER_SET_CLIENT */;
INSERT INTO `genders` (`id`,`account_id`,`name`,`type`) VALUES (1,1,'Man','M'),(2,1,'Woman','F'),(3,1,'Rather not say','O');
INSERT INTO `special_dates` (`id`,`account_id`,`contact_id`,`is_age_based`,`is_year_unknown`,`date`) VALUES (1,1,1,0,0,'1990-05-17'),(2,1,3,0,1,'1900-12-25');
INSERT INTO `contacts` (`id`,`account_id`,`first_name`,`last_name`,`nickname`,`gender_id`,`is_starred`,`is_partial`,`is_active`,`is_dead`,`first_met_where`,`first_met_additional_info`,`job`,`company`,`birthday_special_date_id`,`created_at`,`updated_at`) VALUES
(1,1,'Sarah','Chen','Sal',2,1,0,1,0,'University','Chemistry lab partner','Chemist','Acme',1,'2019-03-01 10:00:00','2020-01-01 09:00:00'),
(2,1,'Ghost',NULL,NULL,NULL,0,1,1,0,NULL,NULL,NULL,NULL,NULL,'2019-03-01 10:00:00','2019-03-01 10:00:00'),
(3,1,'Tom','O''Brien',NULL,1,0,0,1,0,NULL,NULL,NULL,NULL,2,'2019-04-01 10:00:00','2019-04-01 10:00:00'),
(4,1,'Grandpa','Chen',NULL,1,0,0,0,1,NULL,NULL,NULL,NULL,NULL,'2019-05-01 10:00:00','2019-05-01 10:00:00');
INSERT INTO `contact_field_types` (`id`,`account_id`,`name`,`protocol`,`type`) VALUES (1,1,'Email','mailto:','email'),(2,1,'Phone','tel:','phone'),(3,1,'Mastodon',NULL,NULL);
INSERT INTO `contact_fields` (`id`,`account_id`,`contact_id`,`contact_field_type_id`,`data`) VALUES (1,1,1,1,'sarah@example.org'),(2,1,1,3,'@sarah@social.example'),(3,1,2,2,'555-0100');
INSERT INTO `tags` (`id`,`account_id`,`name`,`name_slug`) VALUES (1,1,'family','family'),(2,1,'work','work');
INSERT INTO `contact_tag` (`contact_id`,`tag_id`,`account_id`) VALUES (1,1,1),(4,1,1),(1,2,1),(2,2,1);
INSERT INTO `notes` (`id`,`account_id`,`contact_id`,`body`,`is_favorited`) VALUES (1,1,1,'Likes tea; hates coffee',1),(2,1,2,'About the ghost',0);
INSERT INTO `calls` (`id`,`account_id`,`contact_id`,`called_at`,`content`,`contact_called`) VALUES (1,1,3,'2021-06-01 18:30:00','Talked about the trip',1);
INSERT INTO `activities` (`id`,`account_id`,`activity_type_id`,`summary`,`description`,`happened_at`,`created_at`) VALUES (1,1,NULL,'Dinner (at home), with friends','Pasta','2021-07-04 19:00:00','2021-07-05 08:00:00'),(2,1,NULL,'Seance',NULL,'2021-08-01 20:00:00','2021-08-01 20:00:00');
INSERT INTO `activity_contact` (`activity_id`,`contact_id`,`account_id`) VALUES (1,1,1),(1,3,1),(2,2,1);
INSERT INTO `relationship_types` (`id`,`account_id`,`name`,`name_reverse_relationship`,`relationship_type_group_id`) VALUES (1,1,'parent','child',2),(2,1,'child','parent',2),(3,1,'friend','friend',1);
INSERT INTO `relationships` (`id`,`account_id`,`relationship_type_id`,`contact_is`,`of_contact`) VALUES (1,1,1,4,1),(2,1,2,1,4),(3,1,3,1,3),(4,1,3,3,1),(5,1,3,1,2);
INSERT INTO `places` (`id`,`account_id`,`street`,`city`,`province`,`postal_code`,`country`) VALUES (1,1,'1 Main St','Springfield','IL','62701','US');
INSERT INTO `addresses` (`id`,`account_id`,`place_id`,`contact_id`,`name`) VALUES (1,1,1,1,'Home'),(2,1,99,1,'Nowhere');
INSERT INTO `life_event_categories` (`id`,`account_id`,`name`,`default_life_event_category_key`) VALUES (1,1,'Work & education','work_education');
INSERT INTO `life_event_types` (`id`,`account_id`,`life_event_category_id`,`name`,`default_life_event_type_key`) VALUES (1,1,1,NULL,'new_job');
INSERT INTO `life_events` (`id`,`account_id`,`contact_id`,`life_event_type_id`,`name`,`note`,`happened_at`) VALUES (1,1,1,1,NULL,'Joined Acme','2018-09-01 00:00:00');
INSERT INTO `gifts` (`id`,`account_id`,`contact_id`,`name`,`comment`,`url`,`amount`,`status`,`date`) VALUES (1,1,1,'Teapot','Blue one',NULL,'35.00','offered','2021-12-24'),(2,1,3,'Book',NULL,NULL,NULL,'idea',NULL);
INSERT INTO `reminders` (`id`,`account_id`,`contact_id`,`initial_date`,`title`,`description`,`frequency_type`,`frequency_number`) VALUES (1,1,1,'2022-05-17','Call Sarah',NULL,'year',1);
INSERT INTO `entries` (`id`,`account_id`,`title`,`post`,`created_at`) VALUES (1,1,'Journal','Dear diary','2021-01-01 00:00:00');
"""

# Counts produced by SAMPLE_DUMP.
SAMPLE_COUNTS = {
    "contacts": 3,
    "tags": 2,
    "contact_methods": 2,
    "notes": 1,
    "activities": 1,
    "relationships": 2,
    "addresses": 1,
    "life_events": 1,
    "gifts": 2,
    "reminders": 1,
    "calls": 1,
}

SARAH_AND_GHOST_DUMP = """
INSERT INTO `contacts` (`id`,`first_name`,`last_name`,`is_partial`) VALUES (1,'Sarah','Chen',0),(2,'Ghost',NULL,1);
INSERT INTO `relationship_types` (`id`,`name`,`name_reverse_relationship`) VALUES (1,'friend','friend');
INSERT INTO `relationships` (`id`,`relationship_type_id`,`contact_is`,`of_contact`) VALUES (1,1,1,2);
"""
